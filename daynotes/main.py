"""
DayNotes Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the database handle, registers middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn daynotes.main:app`), `python -m daynotes`, and the
       test suite (which passes its own SQLite-backed Database).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │  app.state.database ── one engine + pool per process     │
    │                                                          │
    │  Middleware:  Req ID → Logging → GZip → CORS             │
    │                                                          │
    │  Routes:  /api/notes  /api/daily-earnings                │
    │           /api/monthly-summary  /login  /health          │
    │                                                          │
    │  Exception Handlers → {"message": ...}                   │
    │   400 validation │ 401 auth │ 403 owner │ 404 │ 500 db   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, ping the database, log readiness
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from daynotes import __version__
from daynotes.config import Settings, settings as default_settings
from daynotes.database import Database
from daynotes.exceptions import (
    AuthenticationError,
    DatabaseError,
    DayNotesError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from daynotes.middleware.logging import RequestLoggingMiddleware
from daynotes.middleware.request_id import RequestIDMiddleware, request_id_var
from daynotes.routes import auth, earnings, health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(app.state.settings.log_level)
    logger.info("=" * 60)
    logger.info("DayNotes Backend %s starting up...", __version__)

    database: Database = app.state.database
    try:
        await database.ping()
        logger.info("Connected to database")
    except (SQLAlchemyError, OSError) as e:
        # Keep serving: /health reports the outage and requests answer 500
        logger.error("Database connection error: %s", str(e))

    logger.info("Server ready on port %d", app.state.settings.port)
    logger.info("=" * 60)

    yield

    logger.info("DayNotes Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the `{"message"}` envelope.

    Handler hierarchy:
        RequestValidationError → 400 (FastAPI's 422 remapped)
        ValidationError        → 400
        AuthenticationError    → 401
        ForbiddenError         → 403
        NotFoundError          → 404
        DatabaseError          → 500 (generic message; detail only in the log)
        DayNotesError (base)   → its status_code
        Exception (fallback)   → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body/path/query failed pydantic validation; name the offending fields."""
        fields = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            name = ".".join(loc) or "body"
            if name not in fields:
                fields.append(name)
        message = "Missing or invalid field(s): " + ", ".join(fields)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), fields)
        return _error(400, message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error(401, exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning(
            "[%s] Ownership check failed: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error(403, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error(500, exc.message)

    @app.exception_handler(DayNotesError)
    async def handle_app_error(request: Request, exc: DayNotesError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace goes to the log only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=exc,
        )
        return _error(500, "An unexpected error occurred. Please try again later.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded singleton.
        database: Store handle; defaults to one built from `settings`.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="DayNotes API",
        description="Calendar notes and daily earnings with 21st-to-20th payroll summaries.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(earnings.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


# uvicorn expects `daynotes.main:app` to be importable
app = create_app()
