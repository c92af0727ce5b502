"""Data access layer tests against a real SQLite file."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from idears.db.models import Attachment, Idea, Note
from idears.db.session import Database
from idears.errors import StorageError
from idears.repositories import attachments as attachments_repo
from idears.repositories import ideas as ideas_repo
from idears.repositories import notes as notes_repo


def make_idea(idea_id: str, created_at: int, title: str = "An idea", **kwargs) -> Idea:
    return Idea(id=idea_id, title=title, created_at=created_at, **kwargs)


def make_note(note_id: str, idea_id: str, created_at: int) -> Note:
    return Note(id=note_id, idea_id=idea_id, content=f"note {note_id}", created_at=created_at)


def make_attachment(attachment_id: str, idea_id: str, created_at: int) -> Attachment:
    return Attachment(
        id=attachment_id,
        idea_id=idea_id,
        filename="plan.pdf",
        filepath=f"/uploads/{attachment_id}.pdf",
        mimetype="application/pdf",
        created_at=created_at,
    )


# =============================================================================
# IDEAS
# =============================================================================


async def test_create_idea_starts_with_zero_votes(session: AsyncSession):
    created = await ideas_repo.create_idea(
        session, make_idea("idea-1", 1000, description="details", votes=7)
    )

    assert created.id == "idea-1"
    assert created.votes == 0
    assert created.description == "details"


async def test_create_idea_without_description_stores_empty_string(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))

    fetched = await ideas_repo.get_idea_by_id(session, "idea-1")
    assert fetched.description == ""


async def test_create_idea_duplicate_id_raises_storage_error(session: AsyncSession, database: Database):
    await ideas_repo.create_idea(session, make_idea("dup", 1000))

    async with database.session() as other:
        with pytest.raises(StorageError):
            await ideas_repo.create_idea(other, make_idea("dup", 2000, title="Again"))
        # The session is rolled back and stays usable
        assert len(await ideas_repo.get_all_ideas(other)) == 1


async def test_storage_error_when_session_passed_by_keyword(session: AsyncSession):
    await ideas_repo.create_idea(session=session, idea=make_idea("dup", 1000))

    with pytest.raises(StorageError):
        await ideas_repo.create_idea(session=session, idea=make_idea("dup", 2000))

    assert [i.id for i in await ideas_repo.get_all_ideas(session=session)] == ["dup"]


async def test_get_all_ideas_empty(session: AsyncSession):
    assert await ideas_repo.get_all_ideas(session) == []


async def test_get_all_ideas_orders_by_votes_then_newest(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("old-one-vote", 1000))
    await ideas_repo.create_idea(session, make_idea("three-votes", 2000))
    await ideas_repo.create_idea(session, make_idea("new-one-vote", 3000))

    await ideas_repo.upvote_idea(session, "old-one-vote")
    await ideas_repo.upvote_idea(session, "new-one-vote")
    for _ in range(3):
        await ideas_repo.upvote_idea(session, "three-votes")

    ideas = await ideas_repo.get_all_ideas(session)

    assert [i.id for i in ideas] == ["three-votes", "new-one-vote", "old-one-vote"]
    assert [i.votes for i in ideas] == [3, 1, 1]


async def test_get_idea_by_id_missing_returns_none(session: AsyncSession):
    assert await ideas_repo.get_idea_by_id(session, "nope") is None


async def test_get_idea_by_id_includes_children_newest_first(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))
    await notes_repo.create_note(session, make_note("n-old", "idea-1", 2000))
    await notes_repo.create_note(session, make_note("n-new", "idea-1", 3000))
    await attachments_repo.create_attachment(session, make_attachment("a-old", "idea-1", 2500))
    await attachments_repo.create_attachment(session, make_attachment("a-new", "idea-1", 3500))

    idea = await ideas_repo.get_idea_by_id(session, "idea-1")

    assert [n.id for n in idea.notes] == ["n-new", "n-old"]
    assert [a.id for a in idea.attachments] == ["a-new", "a-old"]


async def test_update_idea_applies_recognized_fields(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000, title="Before"))

    updated = await ideas_repo.update_idea(session, "idea-1", {"title": "After"})

    assert updated.title == "After"
    assert updated.description == ""
    assert updated.notes == []


async def test_update_idea_ignores_votes(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))

    assert await ideas_repo.update_idea(session, "idea-1", {"votes": 99}) is None

    updated = await ideas_repo.update_idea(
        session, "idea-1", {"votes": 99, "description": "new"}
    )
    assert updated.description == "new"
    assert updated.votes == 0


async def test_update_idea_missing_returns_none(session: AsyncSession):
    assert await ideas_repo.update_idea(session, "nope", {"title": "x"}) is None


async def test_upvote_idea_increments_by_one(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))

    first = await ideas_repo.upvote_idea(session, "idea-1")
    second = await ideas_repo.upvote_idea(session, "idea-1")

    assert first.votes == 1
    assert second.votes == 2
    assert second.attachments == []


async def test_upvote_idea_missing_returns_none(session: AsyncSession):
    assert await ideas_repo.upvote_idea(session, "nope") is None


async def test_concurrent_upvotes_are_not_lost(session: AsyncSession, database: Database):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))

    async def upvote_in_own_session() -> None:
        async with database.session() as s:
            await ideas_repo.upvote_idea(s, "idea-1")

    await asyncio.gather(*(upvote_in_own_session() for _ in range(10)))

    idea = await ideas_repo.get_idea_by_id(session, "idea-1")
    assert idea.votes == 10


async def test_delete_idea_cascades_to_children(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))
    await notes_repo.create_note(session, make_note("n-1", "idea-1", 2000))
    await notes_repo.create_note(session, make_note("n-2", "idea-1", 2001))
    await attachments_repo.create_attachment(session, make_attachment("a-1", "idea-1", 2002))

    assert await ideas_repo.delete_idea(session, "idea-1") is True

    assert await ideas_repo.get_idea_by_id(session, "idea-1") is None
    assert await notes_repo.get_notes_by_idea_id(session, "idea-1") == []
    assert await attachments_repo.get_attachment_by_id(session, "a-1") is None
    assert await notes_repo.delete_note(session, "n-1") is False


async def test_delete_idea_missing_is_idempotent(session: AsyncSession):
    assert await ideas_repo.delete_idea(session, "nope") is False
    assert await ideas_repo.delete_idea(session, "nope") is False


# =============================================================================
# NOTES & ATTACHMENTS
# =============================================================================


async def test_notes_for_unknown_idea_violate_foreign_key(session: AsyncSession):
    with pytest.raises(StorageError):
        await notes_repo.create_note(session, make_note("n-1", "ghost", 1000))

    assert await notes_repo.get_notes_by_idea_id(session, "ghost") == []


async def test_note_lifecycle(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))
    created = await notes_repo.create_note(session, make_note("n-1", "idea-1", 2000))
    await notes_repo.create_note(session, make_note("n-2", "idea-1", 3000))

    assert created.content == "note n-1"
    notes = await notes_repo.get_notes_by_idea_id(session, "idea-1")
    assert [n.id for n in notes] == ["n-2", "n-1"]

    assert await notes_repo.delete_note(session, "n-1") is True
    assert await notes_repo.delete_note(session, "n-1") is False
    assert [n.id for n in await notes_repo.get_notes_by_idea_id(session, "idea-1")] == ["n-2"]


async def test_attachment_lifecycle(session: AsyncSession):
    await ideas_repo.create_idea(session, make_idea("idea-1", 1000))
    await attachments_repo.create_attachment(session, make_attachment("a-1", "idea-1", 2000))
    await attachments_repo.create_attachment(session, make_attachment("a-2", "idea-1", 3000))

    fetched = await attachments_repo.get_attachment_by_id(session, "a-1")
    assert fetched.filepath == "/uploads/a-1.pdf"
    assert fetched.mimetype == "application/pdf"

    listed = await attachments_repo.get_attachments_by_idea_id(session, "idea-1")
    assert [a.id for a in listed] == ["a-2", "a-1"]

    assert await attachments_repo.delete_attachment(session, "a-1") is True
    assert await attachments_repo.delete_attachment(session, "a-1") is False
    assert await attachments_repo.get_attachment_by_id(session, "a-1") is None
