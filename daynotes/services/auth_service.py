"""
DayNotes Backend — Authentication Service
===========================================

What:  Verifies a username/password pair against the `users` table.
How:   Looks the user up by username, then verifies the password hash with
       passlib. Unknown users still pay for one hash verification.

Both failure causes (unknown user, wrong password) raise the same
AuthenticationError, so the 401 body is identical.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from daynotes.exceptions import AuthenticationError, DatabaseError
from daynotes.models.user import User
from daynotes.schemas.auth import LoginResponse, LoginUser
from daynotes import security

logger = logging.getLogger(__name__)


class AuthService:

    async def login(self, db: AsyncSession, username: str, password: str) -> LoginResponse:
        """
        Raises:
            AuthenticationError: unknown user or wrong password (→ 401)
            DatabaseError: lookup failed (→ 500)
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error during login lookup: %s", str(e), exc_info=True)
            raise DatabaseError(message="Server error during login")

        if user is None:
            security.dummy_verify()
            logger.info("Login rejected: unknown username")
            raise AuthenticationError()

        if not security.verify_password(password, user.password):
            logger.info("Login rejected for user id %s: wrong password", user.id)
            raise AuthenticationError()

        logger.info("Login succeeded for user id %s", user.id)
        return LoginResponse(user=LoginUser(id=user.id, username=user.username))


auth_service = AuthService()
