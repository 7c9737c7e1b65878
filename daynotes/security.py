"""
DayNotes Backend — Passwords & Ownership Guard
================================================

Password hashing:
    passlib CryptContext with pbkdf2_sha256. Stored values that passlib
    cannot identify (e.g. legacy plaintext rows) never verify.

Ownership guard:
    Notes carry the user_name that created them. PUT and DELETE pass the
    caller's user_name through `ensure_owner` before touching the row.
"""

import logging
from typing import Optional

from passlib.context import CryptContext

from daynotes.exceptions import ForbiddenError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        # Unrecognized or malformed hash in the users table
        logger.warning("Stored password is not a recognized hash; rejecting login")
        return False


def dummy_verify() -> None:
    """Spend the same hashing time as a real check when the user is unknown."""
    pwd_context.dummy_verify()


def is_owner(claimed: Optional[str], stored: Optional[str]) -> bool:
    """Exact match of the caller's user_name against the stored owner."""
    if not claimed or stored is None:
        return False
    return claimed == stored


def ensure_owner(
    claimed: Optional[str],
    stored: Optional[str],
    resource: str = "resource",
    resource_id: Optional[str] = None,
) -> None:
    """Raise ForbiddenError unless `claimed` owns the resource."""
    if not is_owner(claimed, stored):
        raise ForbiddenError(
            resource=resource,
            resource_id=resource_id,
            context={"claimed_owner": claimed},
        )
