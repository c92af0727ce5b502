"""
Idea persistence.

Every function takes the caller's AsyncSession explicitly. Lookups that miss
return None rather than raising; database failures raise StorageError.
Mutations are committed before the function returns.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from idears.db.models import Idea
from idears.errors import storage_operation

UPDATABLE_FIELDS = ("title", "description")


@storage_operation
async def create_idea(session: AsyncSession, idea: Idea) -> Idea:
    """Insert a new idea. The vote counter always starts at zero."""
    idea.votes = 0
    if idea.description is None:
        idea.description = ""
    session.add(idea)
    await session.commit()
    return idea


@storage_operation
async def get_all_ideas(session: AsyncSession) -> list[Idea]:
    """All ideas, most votes first, newest first among equal votes."""
    result = await session.execute(
        select(Idea)
        .order_by(Idea.votes.desc(), Idea.created_at.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars())


@storage_operation
async def get_idea_by_id(session: AsyncSession, idea_id: str) -> Idea | None:
    """Fetch an idea together with its notes and attachments (newest first)."""
    result = await session.execute(
        select(Idea)
        .where(Idea.id == idea_id)
        .options(selectinload(Idea.notes), selectinload(Idea.attachments))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@storage_operation
async def update_idea(
    session: AsyncSession, idea_id: str, fields: Mapping[str, Any]
) -> Idea | None:
    """
    Apply `title` and/or `description` to an idea.

    Unrecognized keys (votes, created_at, ...) are ignored. Returns None when
    nothing recognized was supplied or the idea does not exist.
    """
    values = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
    if not values:
        return None

    result = await session.execute(
        update(Idea)
        .where(Idea.id == idea_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    if result.rowcount == 0:
        return None
    return await get_idea_by_id(session, idea_id)


@storage_operation
async def upvote_idea(session: AsyncSession, idea_id: str) -> Idea | None:
    """
    Increment the vote counter by exactly one.

    The increment is a single UPDATE evaluated by the database, so concurrent
    upvotes never overwrite each other.
    """
    result = await session.execute(
        update(Idea)
        .where(Idea.id == idea_id)
        .values(votes=Idea.votes + 1)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    if result.rowcount == 0:
        return None
    return await get_idea_by_id(session, idea_id)


@storage_operation
async def delete_idea(session: AsyncSession, idea_id: str) -> bool:
    """Delete an idea; its notes and attachment rows go with it. True if a row was removed."""
    result = await session.execute(
        delete(Idea)
        .where(Idea.id == idea_id)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    return result.rowcount > 0
