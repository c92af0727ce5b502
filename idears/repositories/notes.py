"""Note persistence."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from idears.db.models import Note
from idears.errors import storage_operation


@storage_operation
async def create_note(session: AsyncSession, note: Note) -> Note:
    session.add(note)
    await session.commit()
    return note


@storage_operation
async def get_notes_by_idea_id(session: AsyncSession, idea_id: str) -> list[Note]:
    """Notes of one idea, newest first."""
    result = await session.execute(
        select(Note)
        .where(Note.idea_id == idea_id)
        .order_by(Note.created_at.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars())


@storage_operation
async def delete_note(session: AsyncSession, note_id: str) -> bool:
    """True if a row was removed."""
    result = await session.execute(
        delete(Note)
        .where(Note.id == note_id)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount > 0
