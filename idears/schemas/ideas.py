"""Idea schemas."""

from idears.schemas.attachments import AttachmentRead
from idears.schemas.base import BaseSchema, CreatedMixin, NonBlankStr
from idears.schemas.notes import NoteRead


class IdeaCreate(BaseSchema):
    """Schema for creating an idea. Unknown fields (votes, id, ...) are ignored."""

    title: NonBlankStr
    description: str | None = None  # stored as "" when omitted


class IdeaUpdate(BaseSchema):
    """Schema for updating an idea. All fields optional; null means not supplied."""

    title: NonBlankStr | None = None
    description: str | None = None


class IdeaRead(CreatedMixin, BaseSchema):
    """Schema for reading idea data (listing shape, no children)."""

    title: str
    description: str
    votes: int


class IdeaDetail(IdeaRead):
    """Idea with its notes and attachments, newest first."""

    notes: list[NoteRead] = []
    attachments: list[AttachmentRead] = []
