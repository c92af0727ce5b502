"""Services for resources outside the database."""

from idears.services.storage import FileStorage

__all__ = ["FileStorage"]
