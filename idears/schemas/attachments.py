"""Attachment schemas."""

from idears.schemas.base import BaseSchema, CreatedMixin


class AttachmentRead(CreatedMixin, BaseSchema):
    """
    Schema for reading attachment metadata.

    `filepath` is server-relative and can be fetched directly from the
    `/uploads` mount. `mimetype` is exactly what the uploading client sent.
    """

    idea_id: str
    filename: str
    filepath: str
    mimetype: str
