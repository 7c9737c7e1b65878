"""
DayNotes Backend — DailyEarning SQLAlchemy Model
==================================================

What:  ORM model representing the `daily_earnings` table.
Who:   Used by EarningsService for upserts, month listings and cycle sums.

Table Design:
    - UNIQUE (user_id, record_date): at most one row per user per day. This is
      the conflict target of the save upsert, so the store enforces the
      invariant even under concurrent POSTs.
    - Money columns are NUMERIC(10, 2) in the store and plain floats in
      Python (asdecimal=False), which serialize as JSON numbers.
    - updated_at is refreshed by the upsert on every overwrite.
    - user_id is not a foreign key; earnings and users are independent tables.
"""

from datetime import date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from daynotes.database import Base


class DailyEarning(Base):
    """One day's pay record for one user."""

    __tablename__ = "daily_earnings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    record_date: Mapped[date] = mapped_column(Date, nullable=False)

    daily_wage: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    overtime_pay: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    allowance: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Last time this row was written (UTC)",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "record_date", name="uq_daily_earnings_user_date"),
        Index("idx_daily_earnings_record_date", "record_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<DailyEarning(id={self.id}, user_id={self.user_id}, "
            f"record_date='{self.record_date}')>"
        )
