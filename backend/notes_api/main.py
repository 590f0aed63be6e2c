"""
Notes Service: FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       lifespan() opens the storage on startup and closes it on shutdown.
Who:   Served by uvicorn (`python -m notes_api` or `uvicorn notes_api.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌───────────────────────────────┐                  │
    │  │  Logging (request id + log)   │                  │
    │  └───────────────────────────────┘                  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌──────────────────┐  │
    │  │ GET/POST/PATCH/DELETE /  │ │  GET /health     │  │
    │  └──────────────────────────┘ └──────────────────┘  │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation/NoChange→400 │ NotFound→404 │ 500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging for the configured env
    2. Open SQLNoteStorage (creates the engine)
    3. Build NoteService on top of it

    Shutdown (after uvicorn has drained in-flight requests):
    1. Close the storage (disposes every pooled connection)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.exceptions import (
    NotesError,
    ValidationError,
    NoChangeError,
    NotFoundError,
    StorageError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware, request_id_var
from notes_api.routes import health, notes
from notes_api.services.note_service import NoteService
from notes_api.storage.sql import SQLNoteStorage

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

class RequestIDFilter(logging.Filter):
    """Copies the current request id onto every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get("") or "-"
        return True


def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Level comes from the deployment env: local and dev log at DEBUG, prod at
    INFO. local and dev use a compact human format; prod adds the logger
    name and a full timestamp for log collectors.
    """
    if settings.env == "prod":
        log_format = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s"
        datefmt = "%Y-%m-%dT%H:%M:%S%z"
    else:
        log_format = "%(asctime)s %(levelname)-7s [%(request_id)s] %(message)s"
        datefmt = "%H:%M:%S"

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt=datefmt,
        handlers=[handler],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the storage for the lifetime of the application.

    The storage is opened before the first request is accepted and closed
    after the last one has finished, even when startup of a later step or
    the server itself fails.
    """
    setup_logging()
    logger.info("Notes service %s starting up (env=%s)", __version__, settings.env)

    async with SQLNoteStorage.from_settings(settings) as storage:
        app.state.storage = storage
        app.state.note_service = NoteService(storage)

        logger.info("Server ready at http://%s:%d", settings.host, settings.port)
        yield

        logger.info("Notes service shutting down...")

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map each error kind to its HTTP status and a plain-text body.

    Handler hierarchy:
        RequestValidationError → 400 (body could not be decoded)
        ValidationError        → 400
        NoChangeError          → 400
        NotFoundError          → 404
        StorageError           → 500 (generic text; details only in the log)
        NotesError (base)      → 500
        Exception (fallback)   → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = "Failed to decode request body: " + _describe_validation_errors(exc)
        logger.warning("%s %s: %s", request.method, request.url.path, message)
        return PlainTextResponse(message, status_code=400)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("%s %s: validation error: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NoChangeError)
    async def handle_no_change(request: Request, exc: NoChangeError):
        logger.warning("Edit of note %d rejected: %s", exc.note_id, exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error("Storage error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(NotesError)
    async def handle_notes_error(request: Request, exc: NotesError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return PlainTextResponse(
            f"An unexpected error occurred (request id {rid})",
            status_code=500,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build their own instance and put a storage on app.state
    themselves, since the ASGI test transport does not run the lifespan.
    """
    app = FastAPI(
        title="Notes API",
        description="CRUD over notes (header, content, id) stored in SQLite.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notes_api.main:app` to be importable
app = create_app()
