"""
DayNotes Backend — Login Endpoint Tests
=========================================

Unknown usernames and wrong passwords must be indistinguishable to the
caller: same status, same body.
"""

import pytest


class TestLogin:

    @pytest.mark.asyncio
    async def test_valid_credentials(self, test_client, make_user):
        user_id = await make_user("somchai", "correct horse")

        response = await test_client.post(
            "/login", json={"username": "somchai", "password": "correct horse"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "user": {"id": user_id, "username": "somchai"},
        }

    @pytest.mark.asyncio
    async def test_response_never_contains_password(self, test_client, make_user):
        await make_user("somchai", "correct horse")

        response = await test_client.post(
            "/login", json={"username": "somchai", "password": "correct horse"}
        )

        assert "password" not in response.text

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_identical(self, test_client, make_user):
        await make_user("somchai", "correct horse")

        wrong_password = await test_client.post(
            "/login", json={"username": "somchai", "password": "battery staple"}
        )
        unknown_user = await test_client.post(
            "/login", json={"username": "nobody", "password": "battery staple"}
        )

        assert wrong_password.status_code == 401
        assert unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()
        assert wrong_password.json() == {"message": "Invalid username or password"}

    @pytest.mark.asyncio
    async def test_password_alone_does_not_log_in(self, test_client, make_user):
        await make_user("somchai", "correct horse")

        response = await test_client.post("/login", json={"password": "correct horse"})

        assert response.status_code == 400
        assert "username" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_plaintext_stored_password_is_rejected(self, test_client, make_user):
        await make_user("legacy", "hunter2", hashed=False)

        response = await test_client.post(
            "/login", json={"username": "legacy", "password": "hunter2"}
        )

        assert response.status_code == 401
