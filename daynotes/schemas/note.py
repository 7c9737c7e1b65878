"""
DayNotes Backend — Note Request/Response Schemas
==================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against the request models and
       serializes return values through the response models.

Field names:
    Calendar frontends send either `date`/`text` or the column names
    `date_key`/`note_content`; both spellings are accepted on input.
    Responses always use `date`/`text`.
"""

import datetime

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _strip_owner(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("user_name must not be blank")
    return v


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteSaveRequest(BaseModel):
    """
    Body of POST /api/notes.

    `text` must be present but may be empty: blank text clears the
    caller's note for that date.
    """
    date: datetime.date = Field(
        validation_alias=AliasChoices("date", "date_key"),
        description="Calendar day (YYYY-MM-DD)",
    )
    text: str = Field(
        validation_alias=AliasChoices("text", "note_content"),
        description="Note content; blank deletes the note",
    )
    user_name: str = Field(max_length=100, description="Owner of the note")

    normalize_user_name = field_validator("user_name")(_strip_owner)


class NoteUpdateRequest(BaseModel):
    """Body of PUT /api/notes/{id}."""
    text: str = Field(
        validation_alias=AliasChoices("text", "note_content"),
        description="Replacement note content",
    )
    user_name: str = Field(max_length=100, description="Caller; must own the note")

    normalize_user_name = field_validator("user_name")(_strip_owner)


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /api/notes/{id}."""
    user_name: str = Field(max_length=100, description="Caller; must own the note")

    normalize_user_name = field_validator("user_name")(_strip_owner)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """A stored note as returned by every notes endpoint."""
    id: int = Field(description="Generated note identifier")
    date: datetime.date = Field(description="Calendar day (YYYY-MM-DD)")
    text: str = Field(description="Note content")
    user_name: str = Field(description="Owner of the note")

    @classmethod
    def from_model(cls, note) -> "NoteResponse":
        return cls(
            id=note.id,
            date=note.date_key,
            text=note.note_content,
            user_name=note.user_name,
        )


class NoteClearedResponse(BaseModel):
    """Returned by POST /api/notes when blank text removed the day's note."""
    message: str = Field(default="Note deleted")
    date: datetime.date


class NoteDeletedResponse(BaseModel):
    """Returned by DELETE /api/notes/{id}."""
    message: str = Field(default="Note deleted")
    id: int
