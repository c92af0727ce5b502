"""Ideas CRUD routes."""

from uuid import uuid4

from fastapi import APIRouter, status

from idears.api.deps import AppSettings, DbSession, not_found, storage_errors
from idears.db.models import Idea, now_ms
from idears.repositories import ideas as ideas_repo
from idears.schemas.ideas import IdeaCreate, IdeaDetail, IdeaRead, IdeaUpdate

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=list[IdeaRead])
async def list_ideas(db: DbSession, settings: AppSettings) -> list[IdeaRead]:
    """List all ideas, most votes first, newest first among ties."""
    with storage_errors("Failed to fetch ideas", settings):
        ideas = await ideas_repo.get_all_ideas(db)
    return [IdeaRead.model_validate(i) for i in ideas]


@router.get("/{idea_id}", response_model=IdeaDetail)
async def get_idea(idea_id: str, db: DbSession, settings: AppSettings) -> IdeaDetail:
    """Get one idea with its notes and attachments."""
    with storage_errors("Failed to fetch idea", settings):
        idea = await ideas_repo.get_idea_by_id(db, idea_id)
    if idea is None:
        raise not_found("Idea")
    return IdeaDetail.model_validate(idea)


@router.post("", response_model=IdeaRead, status_code=status.HTTP_201_CREATED)
async def create_idea(data: IdeaCreate, db: DbSession, settings: AppSettings) -> IdeaRead:
    """Create a new idea with zero votes."""
    new_idea = Idea(
        id=str(uuid4()),
        title=data.title,
        description=data.description or "",
        created_at=now_ms(),
    )
    with storage_errors("Failed to create idea", settings):
        created = await ideas_repo.create_idea(db, new_idea)
    return IdeaRead.model_validate(created)


@router.put("/{idea_id}", response_model=IdeaDetail)
async def update_idea(
    idea_id: str,
    data: IdeaUpdate,
    db: DbSession,
    settings: AppSettings,
) -> IdeaDetail:
    """
    Update title and/or description.

    Sending neither (or only unknown fields such as `votes`) changes nothing
    and answers 404, the same as an unknown id.
    """
    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    with storage_errors("Failed to update idea", settings):
        updated = await ideas_repo.update_idea(db, idea_id, fields)
    if updated is None:
        raise not_found("Idea")
    return IdeaDetail.model_validate(updated)


@router.post("/{idea_id}/upvote", response_model=IdeaDetail)
async def upvote_idea(idea_id: str, db: DbSession, settings: AppSettings) -> IdeaDetail:
    """Add one vote."""
    with storage_errors("Failed to upvote idea", settings):
        upvoted = await ideas_repo.upvote_idea(db, idea_id)
    if upvoted is None:
        raise not_found("Idea")
    return IdeaDetail.model_validate(upvoted)


@router.delete("/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_idea(idea_id: str, db: DbSession, settings: AppSettings) -> None:
    """Delete an idea together with its notes and attachment records."""
    with storage_errors("Failed to delete idea", settings):
        deleted = await ideas_repo.delete_idea(db, idea_id)
    if not deleted:
        raise not_found("Idea")
