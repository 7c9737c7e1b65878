"""
DayNotes Backend — Daily Earnings Endpoint Tests
==================================================

What we test:
    ✅ Save then list returns exactly the saved row
    ✅ Repeated saves for one (user, date) leave one row with the latest values
    ✅ Calendar-month listing bounds (leap day, month edges, other users)
    ✅ Billing-cycle summary bounds: 20th of M excluded, 21st of M and
       20th of M+1 included, December rollover
    ✅ Empty cycle sums to zeros, never null
    ✅ Missing userId / recordDate → 400
    ✅ NaN, Infinity, negative and over-range amounts → 400
    ✅ Overwriting a day refreshes updated_at
"""

from datetime import datetime

import pytest
from sqlalchemy import update

from daynotes.models.earning import DailyEarning


async def _save(client, user_id, record_date, wage=0, overtime=0, allowance=0):
    response = await client.post(
        "/api/daily-earnings",
        json={
            "userId": user_id,
            "recordDate": record_date,
            "dailyWage": wage,
            "overtimePay": overtime,
            "allowance": allowance,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestSaveDailyEarnings:

    @pytest.mark.asyncio
    async def test_save_then_list_month(self, test_client):
        saved = await _save(test_client, 1, "2024-03-15", wage=500, overtime=0, allowance=50)

        assert saved["message"] == "Daily earnings saved successfully"
        assert saved["data"]["record_date"] == "2024-03-15"

        response = await test_client.get("/api/daily-earnings/1/2024/3")

        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["record_date"] == "2024-03-15"
        assert rows[0]["daily_wage"] == 500
        assert rows[0]["overtime_pay"] == 0
        assert rows[0]["allowance"] == 50
        assert rows[0]["user_id"] == 1

    @pytest.mark.asyncio
    async def test_repeated_saves_keep_one_row_with_latest_values(self, test_client):
        first = await _save(test_client, 1, "2024-03-15", wage=500)
        await _save(test_client, 1, "2024-03-15", wage=600, overtime=120)
        last = await _save(test_client, 1, "2024-03-15", wage=650, overtime=0, allowance=40)

        assert last["data"]["id"] == first["data"]["id"]
        rows = (await test_client.get("/api/daily-earnings/1/2024/3")).json()
        assert len(rows) == 1
        assert rows[0]["daily_wage"] == 650
        assert rows[0]["overtime_pay"] == 0
        assert rows[0]["allowance"] == 40

    @pytest.mark.asyncio
    async def test_omitted_amounts_default_to_zero(self, test_client):
        response = await test_client.post(
            "/api/daily-earnings", json={"userId": 2, "recordDate": "2024-03-15"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert (data["daily_wage"], data["overtime_pay"], data["allowance"]) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_missing_user_id_is_rejected(self, test_client):
        response = await test_client.post(
            "/api/daily-earnings", json={"recordDate": "2024-03-15", "dailyWage": 500}
        )

        assert response.status_code == 400
        assert "userId" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_missing_record_date_is_rejected(self, test_client):
        response = await test_client.post(
            "/api/daily-earnings", json={"userId": 1, "dailyWage": 500}
        )

        assert response.status_code == 400
        assert "recordDate" in response.json()["message"]


class TestListMonth:

    @pytest.mark.asyncio
    async def test_month_bounds_are_inclusive(self, test_client):
        for day in ("2024-01-31", "2024-02-01", "2024-02-29", "2024-03-01"):
            await _save(test_client, 1, day, wage=100)

        rows = (await test_client.get("/api/daily-earnings/1/2024/2")).json()

        assert [r["record_date"] for r in rows] == ["2024-02-01", "2024-02-29"]

    @pytest.mark.asyncio
    async def test_rows_are_ordered_by_date(self, test_client):
        for day in ("2024-03-20", "2024-03-02", "2024-03-11"):
            await _save(test_client, 1, day, wage=100)

        rows = (await test_client.get("/api/daily-earnings/1/2024/3")).json()

        assert [r["record_date"] for r in rows] == ["2024-03-02", "2024-03-11", "2024-03-20"]

    @pytest.mark.asyncio
    async def test_other_users_rows_are_excluded(self, test_client):
        await _save(test_client, 1, "2024-03-10", wage=100)
        await _save(test_client, 2, "2024-03-10", wage=999)

        rows = (await test_client.get("/api/daily-earnings/1/2024/3")).json()

        assert [r["daily_wage"] for r in rows] == [100]

    @pytest.mark.asyncio
    async def test_invalid_month_is_rejected(self, test_client):
        response = await test_client.get("/api/daily-earnings/1/2024/13")

        assert response.status_code == 400
        assert "month" in response.json()["message"]


class TestMonthlySummary:

    @pytest.mark.asyncio
    async def test_cycle_runs_from_21st_to_20th(self, test_client):
        await _save(test_client, 1, "2024-03-20", wage=1000)  # previous cycle
        await _save(test_client, 1, "2024-03-21", wage=500, overtime=100, allowance=50)
        await _save(test_client, 1, "2024-04-20", wage=400, overtime=0, allowance=25)
        await _save(test_client, 1, "2024-04-21", wage=2000)  # next cycle

        response = await test_client.get("/api/monthly-summary/1/2024/3")

        assert response.status_code == 200
        summary = response.json()
        assert summary["total_wage"] == 900
        assert summary["total_overtime"] == 100
        assert summary["total_allowance"] == 75
        assert summary["grand_total"] == 1075
        assert summary["period_start"] == "2024-03-21"
        assert summary["period_end"] == "2024-04-20"

    @pytest.mark.asyncio
    async def test_december_cycle_rolls_into_january(self, test_client):
        await _save(test_client, 1, "2024-12-21", wage=100)
        await _save(test_client, 1, "2024-12-31", wage=200)
        await _save(test_client, 1, "2025-01-20", wage=300)
        await _save(test_client, 1, "2025-01-21", wage=5000)

        summary = (await test_client.get("/api/monthly-summary/1/2024/12")).json()

        assert summary["total_wage"] == 600
        assert summary["grand_total"] == 600
        assert summary["period_start"] == "2024-12-21"
        assert summary["period_end"] == "2025-01-20"

    @pytest.mark.asyncio
    async def test_empty_cycle_sums_to_zero(self, test_client):
        response = await test_client.get("/api/monthly-summary/42/2024/6")

        assert response.status_code == 200
        summary = response.json()
        for key in ("total_wage", "total_overtime", "total_allowance", "grand_total"):
            assert summary[key] == 0
            assert summary[key] is not None

    @pytest.mark.asyncio
    async def test_summary_only_counts_requested_user(self, test_client):
        await _save(test_client, 1, "2024-03-25", wage=100)
        await _save(test_client, 2, "2024-03-25", wage=700)

        summary = (await test_client.get("/api/monthly-summary/1/2024/3")).json()

        assert summary["grand_total"] == 100


class TestAmountValidation:

    async def _post_raw(self, client, wage_literal):
        return await client.post(
            "/api/daily-earnings",
            content='{"userId": 1, "recordDate": "2024-03-15", "dailyWage": %s}' % wage_literal,
            headers={"Content-Type": "application/json"},
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "-500", "100000000", "1e12"])
    async def test_unstorable_amount_is_rejected(self, test_client, literal):
        response = await self._post_raw(test_client, literal)

        assert response.status_code == 400
        assert "dailyWage" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_rejected_amount_is_not_stored(self, test_client):
        await self._post_raw(test_client, "Infinity")

        rows = (await test_client.get("/api/daily-earnings/1/2024/3")).json()
        summary = (await test_client.get("/api/monthly-summary/1/2024/3")).json()

        assert rows == []
        assert summary["grand_total"] == 0

    @pytest.mark.asyncio
    async def test_largest_storable_amount_is_accepted(self, test_client):
        response = await self._post_raw(test_client, "99999999.99")

        assert response.status_code == 200
        assert response.json()["data"]["daily_wage"] == 99999999.99


class TestUpdatedAt:

    @pytest.mark.asyncio
    async def test_overwrite_refreshes_updated_at(self, test_client, database):
        first = await _save(test_client, 1, "2024-03-15", wage=500)
        assert first["data"]["updated_at"] is not None

        async with database.session() as session:
            await session.execute(
                update(DailyEarning)
                .where(DailyEarning.id == first["data"]["id"])
                .values(updated_at=datetime(2000, 1, 1))
            )

        second = await _save(test_client, 1, "2024-03-15", wage=600)

        assert second["data"]["id"] == first["data"]["id"]
        assert not second["data"]["updated_at"].startswith("2000-01-01")


class TestSummaryRounding:

    @pytest.mark.asyncio
    async def test_totals_are_rounded_to_cents(self, test_client):
        await _save(test_client, 1, "2024-03-21", wage=0.1, allowance=0.1)
        await _save(test_client, 1, "2024-03-22", wage=0.2, allowance=0.2)

        summary = (await test_client.get("/api/monthly-summary/1/2024/3")).json()

        assert summary["total_wage"] == 0.3
        assert summary["total_allowance"] == 0.3
        assert summary["grand_total"] == 0.6
