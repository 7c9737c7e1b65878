"""
DayNotes Backend — Note Service
=================================

What:  Business logic for calendar notes: list, save (upsert/clear),
       update and delete.
How:   One or two SQL statements per call through the injected AsyncSession.
Who:   Called by the /api/notes route handlers.

Save semantics (POST /api/notes):
    blank text      → DELETE the caller's note for that date (no error if absent)
    non-blank text  → INSERT ... ON CONFLICT (user_name, date_key) DO UPDATE

Ownership:
    update_note / delete_note load the row, then run `ensure_owner` before
    writing. A rejected caller leaves the row untouched.

Error Handling:
    SQLAlchemyError → DatabaseError (logged with context, generic to client).
    NotFoundError / ForbiddenError / ValidationError propagate unchanged.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import upsert
from daynotes.exceptions import DatabaseError, NotFoundError, ValidationError
from daynotes.models.note import Note
from daynotes.schemas.note import (
    NoteClearedResponse,
    NoteDeletedResponse,
    NoteResponse,
)
from daynotes.security import ensure_owner
from daynotes.services.periods import calendar_month_window

logger = logging.getLogger(__name__)


class NoteService:
    """
    Stateless note operations; every method receives its session.

    Responsibilities:
        - list_notes(): optional month/owner filter, ordered by date then id
        - save_note(): atomic upsert, or clear on blank text
        - update_note(): owner-only content replacement
        - delete_note(): owner-only removal
    """

    async def list_notes(
        self,
        db: AsyncSession,
        year: Optional[int] = None,
        month: Optional[int] = None,
        user_name: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List notes, optionally limited to one calendar month and/or owner.

        Raises:
            ValidationError: only one of year/month supplied, or month out of range
            DatabaseError: query execution failed
        """
        if (year is None) != (month is None):
            raise ValidationError(
                message="year and month must be provided together",
                field="month" if month is None else "year",
            )

        query = select(Note)
        if year is not None:
            start, end = calendar_month_window(year, month)
            query = query.where(Note.date_key >= start, Note.date_key <= end)
        if user_name:
            query = query.where(Note.user_name == user_name)
        query = query.order_by(Note.date_key, Note.id)

        try:
            result = await db.execute(query)
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.from_model(note) for note in notes]

    async def save_note(
        self,
        db: AsyncSession,
        note_date: date,
        text: str,
        user_name: str,
    ):
        """
        Create or overwrite the caller's note for `note_date`.

        Returns:
            NoteResponse when text was stored, NoteClearedResponse when blank
            text removed the day's note.
        """
        try:
            if not text.strip():
                await db.execute(
                    delete(Note).where(
                        Note.user_name == user_name,
                        Note.date_key == note_date,
                    )
                )
                await db.commit()
                logger.info("Cleared note for %s on %s", user_name, note_date)
                return NoteClearedResponse(date=note_date)

            stmt = upsert(db, Note).values(
                date_key=note_date,
                note_content=text,
                user_name=user_name,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_name", "date_key"],
                set_={"note_content": stmt.excluded.note_content},
            )
            result = await db.scalars(
                stmt.returning(Note),
                execution_options={"populate_existing": True},
            )
            note = result.one()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Database error saving note for %s on %s: %s",
                user_name, note_date, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"date": str(note_date), "error_type": type(e).__name__},
            )

        logger.info("Saved note %s for %s on %s", note.id, user_name, note_date)
        return NoteResponse.from_model(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        text: str,
        user_name: str,
    ) -> NoteResponse:
        """
        Replace the content of an existing note; only its owner may do so.

        Raises:
            ValidationError: blank text
            NotFoundError: no note with `note_id`
            ForbiddenError: `user_name` is not the owner
        """
        if not text.strip():
            raise ValidationError(message="text must not be blank", field="text")

        try:
            note = await self._get(db, note_id)
            ensure_owner(user_name, note.user_name, resource="note", resource_id=str(note_id))
            note.note_content = text
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Updated note %s by %s", note_id, user_name)
        return NoteResponse.from_model(note)

    async def delete_note(
        self,
        db: AsyncSession,
        note_id: int,
        user_name: str,
    ) -> NoteDeletedResponse:
        """Delete a note; only its owner may do so."""
        try:
            note = await self._get(db, note_id)
            ensure_owner(user_name, note.user_name, resource="note", resource_id=str(note_id))
            await db.delete(note)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Deleted note %s by %s", note_id, user_name)
        return NoteDeletedResponse(id=note_id)

    async def _get(self, db: AsyncSession, note_id: int) -> Note:
        result = await db.execute(select(Note).where(Note.id == note_id))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
