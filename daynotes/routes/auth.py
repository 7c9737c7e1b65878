"""
DayNotes Backend — Login Route
================================

POST /login checks a username/password pair and returns the user's id and
username. No session or token is issued.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.schemas.auth import LoginRequest, LoginResponse
from daynotes.schemas.common import ErrorResponse
from daynotes.services.auth_service import auth_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "username or password missing", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Verify credentials",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.login(db=db, username=payload.username, password=payload.password)
