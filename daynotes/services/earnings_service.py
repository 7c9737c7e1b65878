"""
DayNotes Backend — Daily Earnings Service
===========================================

What:  Upsert of daily pay records, month listing, and 21st-to-20th cycle sums.
Who:   Called by the /api/daily-earnings and /api/monthly-summary routes.

Query plans:
    save_daily_earning:
        INSERT INTO daily_earnings (...) VALUES (...)
        ON CONFLICT (user_id, record_date)
        DO UPDATE SET daily_wage, overtime_pay, allowance, updated_at = now()
        RETURNING *
        → one statement; the unique constraint guarantees one row per key

    list_month:
        SELECT ... WHERE user_id = :u AND record_date BETWEEN :first AND :last
        ORDER BY record_date ASC

    monthly_summary:
        SELECT SUM(daily_wage), SUM(overtime_pay), SUM(allowance)
        WHERE user_id = :u AND record_date BETWEEN :21st AND :20th-next
        → NULL sums (no rows) are normalized to 0 before the grand total
"""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.database import upsert
from daynotes.exceptions import DatabaseError
from daynotes.models.earning import DailyEarning
from daynotes.schemas.earning import (
    DailyEarningRequest,
    DailyEarningResponse,
    DailyEarningSaveResponse,
    MonthlySummaryResponse,
)
from daynotes.services.periods import billing_cycle_window, calendar_month_window

logger = logging.getLogger(__name__)


def _amount(value) -> float:
    """SUM() over no rows is NULL; report it as 0, rounded to cents."""
    return round(float(value or 0), 2)


class EarningsService:
    """Stateless daily-earnings operations; every method receives its session."""

    async def save_daily_earning(
        self,
        db: AsyncSession,
        entry: DailyEarningRequest,
    ) -> DailyEarningSaveResponse:
        """
        Insert the day's record, or overwrite the amounts of an existing one.

        Raises:
            DatabaseError: statement execution failed
        """
        stmt = upsert(db, DailyEarning).values(
            user_id=entry.user_id,
            record_date=entry.record_date,
            daily_wage=entry.daily_wage,
            overtime_pay=entry.overtime_pay,
            allowance=entry.allowance,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "record_date"],
            set_={
                "daily_wage": stmt.excluded.daily_wage,
                "overtime_pay": stmt.excluded.overtime_pay,
                "allowance": stmt.excluded.allowance,
                "updated_at": func.now(),
            },
        )

        try:
            result = await db.scalars(
                stmt.returning(DailyEarning),
                execution_options={"populate_existing": True},
            )
            row = result.one()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Error saving daily earnings for user %s on %s: %s",
                entry.user_id, entry.record_date, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Failed to save daily earnings.",
                context={
                    "user_id": entry.user_id,
                    "record_date": str(entry.record_date),
                    "error_type": type(e).__name__,
                },
            )

        logger.info("Saved daily earnings for user %s on %s", entry.user_id, entry.record_date)
        return DailyEarningSaveResponse(data=DailyEarningResponse.model_validate(row))

    async def list_month(
        self,
        db: AsyncSession,
        user_id: int,
        year: int,
        month: int,
    ) -> List[DailyEarningResponse]:
        """All of a user's rows within the calendar month, oldest first."""
        start, end = calendar_month_window(year, month)
        query = (
            select(DailyEarning)
            .where(
                DailyEarning.user_id == user_id,
                DailyEarning.record_date >= start,
                DailyEarning.record_date <= end,
            )
            .order_by(DailyEarning.record_date.asc())
        )

        try:
            result = await db.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Error fetching daily earnings: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch daily earnings.",
                context={"user_id": user_id, "year": year, "month": month},
            )

        return [DailyEarningResponse.model_validate(row) for row in rows]

    async def monthly_summary(
        self,
        db: AsyncSession,
        user_id: int,
        year: int,
        month: int,
    ) -> MonthlySummaryResponse:
        """
        Sum wage, overtime and allowance over the billing cycle that starts on
        the 21st of `month`.
        """
        start, end = billing_cycle_window(year, month)
        query = select(
            func.sum(DailyEarning.daily_wage).label("total_wage"),
            func.sum(DailyEarning.overtime_pay).label("total_overtime"),
            func.sum(DailyEarning.allowance).label("total_allowance"),
        ).where(
            DailyEarning.user_id == user_id,
            DailyEarning.record_date >= start,
            DailyEarning.record_date <= end,
        )

        try:
            result = await db.execute(query)
            sums = result.one()
        except SQLAlchemyError as e:
            logger.error("Error fetching monthly summary: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch monthly summary.",
                context={"user_id": user_id, "year": year, "month": month},
            )

        total_wage = _amount(sums.total_wage)
        total_overtime = _amount(sums.total_overtime)
        total_allowance = _amount(sums.total_allowance)

        return MonthlySummaryResponse(
            total_wage=total_wage,
            total_overtime=total_overtime,
            total_allowance=total_allowance,
            grand_total=round(total_wage + total_overtime + total_allowance, 2),
            period_start=start,
            period_end=end,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
earnings_service = EarningsService()
