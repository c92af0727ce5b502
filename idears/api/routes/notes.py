"""Notes routes: listed and created under an idea, deleted by their own id."""

from uuid import uuid4

from fastapi import APIRouter, status

from idears.api.deps import AppSettings, DbSession, get_idea_or_404, not_found, storage_errors
from idears.db.models import Note, now_ms
from idears.repositories import notes as notes_repo
from idears.schemas.notes import NoteCreate, NoteRead

router = APIRouter(tags=["notes"])


@router.post(
    "/ideas/{idea_id}/notes",
    response_model=NoteRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    idea_id: str,
    data: NoteCreate,
    db: DbSession,
    settings: AppSettings,
) -> NoteRead:
    """Add a note to an existing idea."""
    await get_idea_or_404(db, idea_id, settings)

    new_note = Note(
        id=str(uuid4()),
        idea_id=idea_id,
        content=data.content,
        created_at=now_ms(),
    )
    with storage_errors("Failed to add note", settings):
        created = await notes_repo.create_note(db, new_note)
    return NoteRead.model_validate(created)


@router.get("/ideas/{idea_id}/notes", response_model=list[NoteRead])
async def list_notes(idea_id: str, db: DbSession, settings: AppSettings) -> list[NoteRead]:
    """List notes for an idea, newest first."""
    await get_idea_or_404(db, idea_id, settings)

    with storage_errors("Failed to fetch notes", settings):
        notes = await notes_repo.get_notes_by_idea_id(db, idea_id)
    return [NoteRead.model_validate(n) for n in notes]


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, db: DbSession, settings: AppSettings) -> None:
    """Delete a note."""
    with storage_errors("Failed to delete note", settings):
        deleted = await notes_repo.delete_note(db, note_id)
    if not deleted:
        raise not_found("Note")
