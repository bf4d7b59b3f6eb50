"""
Digital Life Lessons API — FastAPI Application Factory
========================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn lifelessons.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌─────────┐  │
    │  │  Req ID  │→│ Access Log  │→│ GZip │→│  CORS   │  │
    │  └──────────┘ └─────────────┘ └──────┘ └─────────┘  │
    │                                                     │
    │  Routers:                                           │
    │  users · lessons · favorites · reports · comments   │
    │  health (GET /, GET /health)                        │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/Conflict→400 │ NotFound→404 │ DB→500    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → ping MongoDB (tenacity retry) → ensure indexes
    Shutdown: close the Motor client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from lifelessons import __version__
from lifelessons.config import settings
from lifelessons.database import close_client, ensure_indexes, get_database, ping_with_retry
from lifelessons.exceptions import (
    ConflictError,
    DatabaseError,
    LifeLessonsError,
    NotFoundError,
)
from lifelessons.middleware.logging import RequestLoggingMiddleware
from lifelessons.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from lifelessons.routes import comments, favorites, health, lessons, reports, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, confirm MongoDB is reachable, create indexes.
    Shutdown: close the shared Motor client.

    An unreachable database does not abort startup: the server keeps serving
    GET / and /health, and store-backed endpoints answer 500 until it returns.
    """
    setup_logging()
    logger.info("Digital Life Lessons API starting up...")

    db = get_database()
    if await ping_with_retry(db):
        await ensure_indexes(db)
    else:
        logger.error("Starting without a database connection; check DB_USER/DB_PASS or MONGODB_URI.")

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("Digital Life Lessons API shutting down...")
    close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str) -> dict:
    return {"message": message, "request_id": request_id_var.get("")}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes with a {message, request_id} body.

    Handler hierarchy:
        RequestValidationError  → 400 (missing/invalid body field)
        ConflictError           → 400
        NotFoundError           → 404
        DatabaseError           → 500 (per-operation fixed message)
        LifeLessonsError (base) → 500
        Exception (fallback)    → 500 generic message

    Driver errors and stack traces are logged server-side only.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Presence checks on request bodies and query strings."""
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", message)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content=_error_body(message))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(status_code=400, content=_error_body(exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body(exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Fixed per-operation message to the client; context logged server-side."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body(exc.message))

    @app.exception_handler(LifeLessonsError)
    async def handle_app_error(request: Request, exc: LifeLessonsError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=500, content=_error_body(exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all so raw stack traces never reach the client.

        Runs outside the middleware stack, after RequestIDMiddleware has reset
        its ContextVar, so the id is read back from request.state instead.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        body = {"message": "An unexpected error occurred. Please try again later.", "request_id": rid}
        headers = {REQUEST_ID_HEADER: rid} if rid else None
        return JSONResponse(status_code=500, content=body, headers=headers)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call so tests can build isolated apps and
    override the get_database dependency on each.
    """
    app = FastAPI(
        title="Digital Life Lessons API",
        description=(
            "Lessons, comments, favorites and reports for the Digital Life Lessons app. "
            "Backed by MongoDB."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(lessons.router)
    app.include_router(favorites.router)
    app.include_router(reports.router)
    app.include_router(comments.router)

    return app


# uvicorn expects `lifelessons.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("lifelessons.main:app", host=settings.host, port=settings.port)
