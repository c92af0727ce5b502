"""Data access layer: async CRUD over the store, one module per entity."""

from idears.repositories import attachments, ideas, notes

__all__ = ["attachments", "ideas", "notes"]
