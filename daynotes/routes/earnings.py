"""
DayNotes Backend — Daily Earnings Route Handlers
==================================================

What:  POST /api/daily-earnings
       GET  /api/daily-earnings/{user_id}/{year}/{month}
       GET  /api/monthly-summary/{user_id}/{year}/{month}
Who:   Called by the payroll frontend.

Month listings use the calendar month; the summary uses the payroll cycle
(21st of `month` through the 20th of the next month).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import get_db_session
from daynotes.schemas.common import ErrorResponse
from daynotes.schemas.earning import (
    DailyEarningRequest,
    DailyEarningResponse,
    DailyEarningSaveResponse,
    MonthlySummaryResponse,
)
from daynotes.services.earnings_service import earnings_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Earnings"])


@router.post(
    "/daily-earnings",
    response_model=DailyEarningSaveResponse,
    responses={
        400: {"description": "userId or recordDate missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Save one day's earnings",
)
async def save_daily_earning(
    payload: DailyEarningRequest,
    db: AsyncSession = Depends(get_db_session),
) -> DailyEarningSaveResponse:
    """
    Create or overwrite the record for (userId, recordDate).

    Example body:
        {"userId": 1, "recordDate": "2024-03-15", "dailyWage": 500,
         "overtimePay": 0, "allowance": 50}
    """
    return await earnings_service.save_daily_earning(db=db, entry=payload)


@router.get(
    "/daily-earnings/{user_id}/{year}/{month}",
    response_model=List[DailyEarningResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List a user's earnings for a calendar month",
)
async def list_daily_earnings(
    user_id: int,
    year: int = Path(ge=1, le=9998),
    month: int = Path(ge=1, le=12),
    db: AsyncSession = Depends(get_db_session),
) -> List[DailyEarningResponse]:
    return await earnings_service.list_month(db=db, user_id=user_id, year=year, month=month)


@router.get(
    "/monthly-summary/{user_id}/{year}/{month}",
    response_model=MonthlySummaryResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Totals for the 21st-to-20th payroll cycle",
)
async def monthly_summary(
    user_id: int,
    year: int = Path(ge=1, le=9998),
    month: int = Path(ge=1, le=12),
    db: AsyncSession = Depends(get_db_session),
) -> MonthlySummaryResponse:
    """
    Example:
        GET /api/monthly-summary/1/2024/12 sums 2024-12-21 through 2025-01-20.
    """
    return await earnings_service.monthly_summary(db=db, user_id=user_id, year=year, month=month)
