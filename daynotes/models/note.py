"""
DayNotes Backend — Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer primary key generated by the store
    - date_key: the calendar day the note belongs to
    - user_name: the owner; only this name may update or delete the row
    - UNIQUE (user_name, date_key): one note per user per day, which is the
      conflict target of the save upsert

    Index on date_key:
        Month listings filter on a date_key range and order by it.
"""

from datetime import date

from sqlalchemy import Date, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from daynotes.database import Base


class Note(Base):
    """
    A calendar-date-keyed text entry.

    Lifecycle:
        1. Created by POST /api/notes with non-blank text
        2. Overwritten by a later POST for the same (user_name, date_key),
           or by PUT /api/notes/{id} from the owner
        3. Deleted by a POST with blank text, or DELETE /api/notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    date_key: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar day this note belongs to",
    )

    note_content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-form note text",
    )

    user_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Owner of the note",
    )

    __table_args__ = (
        UniqueConstraint("user_name", "date_key", name="uq_notes_user_date"),
        Index("idx_notes_date_key", "date_key"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, date_key='{self.date_key}', user_name='{self.user_name}')>"
