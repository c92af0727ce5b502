"""API routes for file attachments."""

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from idears.api.deps import (
    AppSettings,
    DbSession,
    Storage,
    get_idea_or_404,
    not_found,
    storage_errors,
)
from idears.config import sanitize_error
from idears.db.models import Attachment, now_ms
from idears.errors import StorageError, UploadTooLargeError
from idears.repositories import attachments as attachments_repo
from idears.schemas.attachments import AttachmentRead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attachments"])


# =============================================================================
# UPLOAD
# =============================================================================


@router.post(
    "/ideas/{idea_id}/attachments",
    response_model=AttachmentRead,
    status_code=status.HTTP_201_CREATED,
)
async def upload_attachment(
    idea_id: str,
    db: DbSession,
    storage: Storage,
    settings: AppSettings,
    file: UploadFile | None = File(None),
) -> AttachmentRead:
    """
    Upload a file to an idea.

    Flow:
    1. Reject requests without a `file` part (400) or for unknown ideas (404)
    2. Move the payload into the upload directory as `<attachment id><ext>`
    3. Only after the file is in place, record the metadata

    A failed move leaves no metadata behind. A failed metadata insert removes
    the stored file again.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    await get_idea_or_404(db, idea_id, settings)

    attachment_id = str(uuid4())
    original_name = file.filename or attachment_id
    stored_name = f"{attachment_id}{Path(original_name).suffix}"

    try:
        await storage.save(file, stored_name)
    except UploadTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(e),
        ) from e
    except StorageError as e:
        logger.error("Failed to store upload for idea %s: %s", idea_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Failed to upload file", settings=settings),
        ) from e

    new_attachment = Attachment(
        id=attachment_id,
        idea_id=idea_id,
        filename=original_name,
        filepath=storage.public_path(stored_name),
        mimetype=file.content_type or "application/octet-stream",
        created_at=now_ms(),
    )
    try:
        with storage_errors("Failed to add attachment", settings):
            created = await attachments_repo.create_attachment(db, new_attachment)
    except HTTPException:
        await storage.delete(new_attachment.filepath)
        raise

    return AttachmentRead.model_validate(created)


# =============================================================================
# LISTING / DELETION
# =============================================================================


@router.get("/ideas/{idea_id}/attachments", response_model=list[AttachmentRead])
async def list_attachments(
    idea_id: str,
    db: DbSession,
    settings: AppSettings,
) -> list[AttachmentRead]:
    """List attachments for an idea, newest first."""
    await get_idea_or_404(db, idea_id, settings)

    with storage_errors("Failed to fetch attachments", settings):
        attachments = await attachments_repo.get_attachments_by_idea_id(db, idea_id)
    return [AttachmentRead.model_validate(a) for a in attachments]


@router.delete("/attachments/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attachment(
    attachment_id: str,
    db: DbSession,
    storage: Storage,
    settings: AppSettings,
) -> None:
    """
    Delete an attachment's file and its metadata.

    The file is removed first (a file that is already gone is fine), then the
    database row. If the row is missing at either step the answer is 404.
    """
    with storage_errors("Failed to delete attachment", settings):
        attachment = await attachments_repo.get_attachment_by_id(db, attachment_id)
    if attachment is None:
        raise not_found("Attachment")

    with storage_errors("Failed to delete attachment file", settings):
        await storage.delete(attachment.filepath)

    with storage_errors("Failed to delete attachment", settings):
        deleted = await attachments_repo.delete_attachment(db, attachment_id)
    if not deleted:
        raise not_found("Attachment")
