"""Pydantic schemas for API request/response validation."""

from idears.schemas.attachments import AttachmentRead
from idears.schemas.ideas import IdeaCreate, IdeaDetail, IdeaRead, IdeaUpdate
from idears.schemas.notes import NoteCreate, NoteRead

__all__ = [
    # Ideas
    "IdeaCreate",
    "IdeaDetail",
    "IdeaRead",
    "IdeaUpdate",
    # Notes
    "NoteCreate",
    "NoteRead",
    # Attachments
    "AttachmentRead",
]
