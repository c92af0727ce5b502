"""API routes package."""

from idears.api.routes import attachments, ideas, notes

__all__ = [
    "attachments",
    "ideas",
    "notes",
]
