"""
Attachment metadata persistence.

Only the database row is handled here; the stored binary is created and
removed by idears.services.storage.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from idears.db.models import Attachment
from idears.errors import storage_operation


@storage_operation
async def create_attachment(session: AsyncSession, attachment: Attachment) -> Attachment:
    session.add(attachment)
    await session.commit()
    return attachment


@storage_operation
async def get_attachments_by_idea_id(session: AsyncSession, idea_id: str) -> list[Attachment]:
    """Attachments of one idea, newest first."""
    result = await session.execute(
        select(Attachment)
        .where(Attachment.idea_id == idea_id)
        .order_by(Attachment.created_at.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars())


@storage_operation
async def get_attachment_by_id(session: AsyncSession, attachment_id: str) -> Attachment | None:
    result = await session.execute(
        select(Attachment)
        .where(Attachment.id == attachment_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@storage_operation
async def delete_attachment(session: AsyncSession, attachment_id: str) -> bool:
    """Remove the metadata row. True if a row was removed."""
    result = await session.execute(
        delete(Attachment)
        .where(Attachment.id == attachment_id)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount > 0
