"""
DayNotes Backend — Notes Route Handlers
=========================================

What:  GET/POST /api/notes, PUT/DELETE /api/notes/{id}.
How:   Validates query/body with pydantic, delegates to NoteService.
Who:   Called by the calendar frontend.

Mutations (PUT, DELETE) carry the caller's `user_name` in the JSON body;
NoteService rejects callers that do not own the note with 403.
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.schemas.common import ErrorResponse
from daynotes.schemas.note import (
    NoteClearedResponse,
    NoteDeleteRequest,
    NoteDeletedResponse,
    NoteResponse,
    NoteSaveRequest,
    NoteUpdateRequest,
)
from daynotes.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "year without month, or month without year", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List notes",
)
async def list_notes(
    year: Optional[int] = Query(default=None, ge=1, le=9998, description="Filter year (requires month)"),
    month: Optional[int] = Query(default=None, ge=1, le=12, description="Filter month (requires year)"),
    user_name: Optional[str] = Query(default=None, description="Only notes owned by this user"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """
    List notes ordered by date, then id.

    Example:
        GET /api/notes?year=2024&month=3&user_name=somchai
    """
    return await note_service.list_notes(db=db, year=year, month=month, user_name=user_name)


@router.post(
    "/notes",
    response_model=Union[NoteResponse, NoteClearedResponse],
    responses={
        400: {"description": "Missing date, text or user_name", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Save or clear the note for a date",
)
async def save_note(
    payload: NoteSaveRequest,
    db: AsyncSession = Depends(get_db_session),
) -> Union[NoteResponse, NoteClearedResponse]:
    """
    Upsert the caller's note for `date`. Blank `text` deletes it instead.
    """
    return await note_service.save_note(
        db=db,
        note_date=payload.date,
        text=payload.text,
        user_name=payload.user_name,
    )


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing or blank fields", "model": ErrorResponse},
        403: {"description": "Caller does not own the note", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's text",
)
async def update_note(
    note_id: int,
    payload: NoteUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db,
        note_id=note_id,
        text=payload.text,
        user_name=payload.user_name,
    )


@router.delete(
    "/notes/{note_id}",
    response_model=NoteDeletedResponse,
    responses={
        400: {"description": "Missing user_name", "model": ErrorResponse},
        403: {"description": "Caller does not own the note", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    payload: NoteDeleteRequest,
    db: AsyncSession = Depends(get_db_session),
) -> NoteDeletedResponse:
    return await note_service.delete_note(db=db, note_id=note_id, user_name=payload.user_name)
