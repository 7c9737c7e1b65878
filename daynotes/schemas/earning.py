"""
DayNotes Backend — Daily Earnings Request/Response Schemas
============================================================

The payroll frontend posts camelCase keys (`userId`, `recordDate`, ...);
responses mirror the table's snake_case columns.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a NUMERIC(10, 2) column holds
MAX_AMOUNT = 99_999_999.99


class DailyEarningRequest(BaseModel):
    """
    Body of POST /api/daily-earnings.

    userId and recordDate are required; omitted or null wage fields are
    stored as 0. Amounts must be finite, non-negative and fit NUMERIC(10, 2).
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", gt=0)
    record_date: datetime.date = Field(alias="recordDate")
    daily_wage: float = Field(default=0, alias="dailyWage", ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    overtime_pay: float = Field(default=0, alias="overtimePay", ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    allowance: float = Field(default=0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    @field_validator("daily_wage", "overtime_pay", "allowance", mode="before")
    @classmethod
    def null_amount_is_zero(cls, v):
        return 0 if v is None else v


class DailyEarningResponse(BaseModel):
    """One stored `daily_earnings` row."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    record_date: datetime.date
    daily_wage: float
    overtime_pay: float
    allowance: float
    updated_at: Optional[datetime.datetime] = None


class DailyEarningSaveResponse(BaseModel):
    message: str = Field(default="Daily earnings saved successfully")
    data: DailyEarningResponse


class MonthlySummaryResponse(BaseModel):
    """
    Totals for one 21st-to-20th billing cycle.

    Every total is a number; a cycle without rows sums to 0, never null.
    """
    total_wage: float = Field(description="Sum of daily_wage over the cycle")
    total_overtime: float = Field(description="Sum of overtime_pay over the cycle")
    total_allowance: float = Field(description="Sum of allowance over the cycle")
    grand_total: float = Field(description="total_wage + total_overtime + total_allowance")
    period_start: datetime.date = Field(description="First day of the cycle (the 21st)")
    period_end: datetime.date = Field(description="Last day of the cycle (the 20th)")
