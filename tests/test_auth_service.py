"""
DayNotes Backend — Auth Service Unit Tests
============================================
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from daynotes.exceptions import AuthenticationError, DatabaseError
from daynotes.services.auth_service import AuthService


class TestLogin:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_lookup_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection lost")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.login(mock_db_session, "somchai", "secret")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server error during login"

    @pytest.mark.asyncio
    async def test_unknown_user_still_verifies_a_hash(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result

        with patch("daynotes.services.auth_service.security.dummy_verify") as dummy:
            with pytest.raises(AuthenticationError):
                await self.service.login(mock_db_session, "nobody", "secret")

        dummy.assert_called_once()

    @pytest.mark.asyncio
    async def test_unreachable_store_answers_500(self, unreachable_client):
        response = await unreachable_client.post(
            "/login", json={"username": "somchai", "password": "secret"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Server error during login"}
