"""Note schemas."""

from idears.schemas.base import BaseSchema, CreatedMixin, NonBlankStr


class NoteCreate(BaseSchema):
    """Schema for adding a note to an idea."""

    content: NonBlankStr


class NoteRead(CreatedMixin, BaseSchema):
    """Schema for reading note data."""

    idea_id: str
    content: str
