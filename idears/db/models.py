"""
SQLAlchemy 2.0 Models for Idears.

Uses modern declarative syntax with Mapped[] type annotations.
Ids are UUID4 strings and timestamps are integer milliseconds since the epoch.
Child rows reference ideas with ON DELETE CASCADE, so removing an idea row
removes its notes and attachments inside the database itself.
"""

import time

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from idears.db.base import Base


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class Idea(Base):
    """
    A tracked proposal.

    Parent entity for notes and attachments. `votes` only ever moves upward,
    one atomic increment at a time.
    """

    __tablename__ = "ideas"
    __table_args__ = (Index("idx_ideas_ranking", "votes", "created_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))

    # Relationships (deletes are left to the database cascade)
    notes: Mapped[list["Note"]] = relationship(
        "Note",
        back_populates="idea",
        order_by="Note.created_at.desc()",
        passive_deletes=True,
    )
    attachments: Mapped[list["Attachment"]] = relationship(
        "Attachment",
        back_populates="idea",
        order_by="Attachment.created_at.desc()",
        passive_deletes=True,
    )


class Note(Base):
    """Free-text annotation on exactly one idea."""

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    idea_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Relationships
    idea: Mapped["Idea"] = relationship("Idea", back_populates="notes")


class Attachment(Base):
    """
    Metadata for an uploaded file.

    The binary lives in the upload directory as `<id><extension>`; `filepath`
    records its server-relative location and `mimetype` is whatever the
    client claimed.
    """

    __tablename__ = "attachments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    idea_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filename: Mapped[str] = mapped_column(Text, nullable=False)  # Original client name
    filepath: Mapped[str] = mapped_column(Text, nullable=False)  # e.g. /uploads/<id>.png
    mimetype: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Relationships
    idea: Mapped["Idea"] = relationship("Idea", back_populates="attachments")
