"""
DayNotes Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for each failure category.
How:   Each exception carries a user-facing message, an HTTP status code and
       an optional context dict. Global exception handlers (registered in
       main.py) turn them into `{"message": ...}` JSON responses.
Who:   Raised by services, the billing calculator and the ownership guard.

Exception Hierarchy:
    DayNotesError (base)         → 500
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

`context` is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


class DayNotesError(Exception):
    """
    Base exception for all DayNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DayNotesError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, a blank note on update, a month outside 1-12,
             year/month filters supplied without each other.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(DayNotesError):
    """
    Raised when login credentials do not match.

    The message is identical for an unknown username and a wrong password.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid username or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(DayNotesError):
    """Raised by the ownership guard when the caller does not own the resource."""

    status_code = 403

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You are not allowed to modify this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotFoundError(DayNotesError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so the handler can answer 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(DayNotesError):
    """
    Raised when a query against the store fails.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the SQL error is
    only written to the log via `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
