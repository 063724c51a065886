"""
Readly Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn readly.main:app), or by
       tests with an injected Database.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ Tracing (ID, log, 500)   │→│  GZip → CORS    │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /blogs       │ │ /wishlist│ │ /comments       │  │
    │  │ /featured-.. │ │          │ │ / and /health   │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ InvalidId→400 │ AlreadyExists→409 │ DB→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Create the MongoDB client unless one was injected
    4. Ensure wishlist indexes

    Shutdown:
    1. Close the MongoDB client if this app created it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from readly import __version__
from readly.config import settings
from readly.database import Database
from readly.exceptions import (
    AlreadyExistsError,
    DatabaseError,
    InvalidIdentifierError,
    ReadlyError,
)
from readly.middleware.tracing import (
    RequestTracingMiddleware,
    request_id_var,
    unexpected_error_response,
)
from readly.routes import blogs, comments, health, wishlist

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level (LOG_LEVEL env var)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries that log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage the MongoDB client around the application's lifetime.

    An injected Database (app.state.database set by create_app) is used as-is
    and left open on shutdown; its owner closes it. Otherwise the client is
    built from settings here and closed after the server stops.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Readly backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The server still starts so / and /health can report the problem
        logger.error("Configuration error: %s", str(e))

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)
    database: Database = app.state.database

    try:
        await database.ensure_indexes()
    except PyMongoError as e:
        logger.error("Could not ensure indexes (duplicate wishes are only pre-checked): %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Readly backend shutting down...")
    if owns_database:
        await database.close()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        InvalidIdentifierError  → 400 Bad Request
        AlreadyExistsError      → 409 Conflict {"message": "Already in wishlist"}
        DatabaseError           → 500 Internal Server Error
        ReadlyError (base)      → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Internal details (driver messages, stack traces) are logged, never returned.
    """

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid identifier: %s", rid, exc.value)
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_identifier",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(AlreadyExistsError)
    async def handle_already_exists(request: Request, exc: AlreadyExistsError):
        """Body is exactly {"message": ...}; existing clients match on it."""
        return JSONResponse(status_code=409, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(ReadlyError)
    async def handle_readly_error(request: Request, exc: ReadlyError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for errors raised outside RequestTracingMiddleware.

        Starlette runs this handler in ServerErrorMiddleware, which wraps the
        user middleware. Errors from the routes are already answered by the
        tracing middleware with the same envelope.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return unexpected_error_response(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Store to serve from. When omitted, the lifespan builds one
                  from settings at startup and closes it at shutdown.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Readly API",
        description="Blogs, comments and per-user wishlists backed by MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # Tracing → GZip → CORS → route
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestTracingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(blogs.router)
    app.include_router(wishlist.router)
    app.include_router(comments.router)

    return app


# uvicorn expects `readly.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` on settings.host:settings.port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
