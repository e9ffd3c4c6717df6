"""
Users API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its own UserStore.
Who:   Called by uvicorn (`uvicorn users_api.main:app`) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Req ID      │→│  Logging     │→│  CORS       │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ /api/users (CRUD)        │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ NotFound→404 │ *→500   │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.user_store: UserStore                    │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from users_api import __version__
from users_api.config import settings
from users_api.exceptions import NotFoundError, UsersApiError, ValidationError
from users_api.middleware.logging import RequestLoggingMiddleware
from users_api.middleware.request_id import RequestIDMiddleware, request_id_var
from users_api.routes import health, users
from users_api.services.user_store import UserStore, build_default_store

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before anything else logs.
    Format:  2024-01-15T12:00:00 [INFO] users_api.services.user_store: Created user 3
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and report the store's initial state.
    Shutdown: log it. The store is in memory, so there is nothing to flush.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Users API %s starting up...", __version__)
    logger.info("User store ready with %d user(s)", app.state.user_store.count())
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    logger.info("Users API shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError      → 400 Bad Request (client can fix the input)
        NotFoundError        → 404 Not Found
        UsersApiError (base) → 500 Internal Server Error (catch-all for custom)
        Exception (fallback) → 500 Internal Server Error (unexpected errors)

    Exception handlers never expose stack traces or internal state in the
    response body. Details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent missing or empty fields; tell them which."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": {"fields": exc.fields},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested user doesn't exist."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(UsersApiError)
    async def handle_app_error(request: Request, exc: UsersApiError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Starlette runs this outside the middleware stack, so the request ID
        is read from request.state rather than the ContextVar.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,  # Log full stack trace for debugging
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[UserStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: The UserStore this app serves. When omitted, a new store is
               built (seeded with the demo users if settings.seed_demo_users).

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Users API",
        description=(
            "In-memory REST resource store for user records. "
            "Create, read, update, and delete users over /api/users."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # The only reference to the store; routes reach it through get_user_store
    app.state.user_store = store if store is not None else build_default_store(
        seed_demo_users=settings.seed_demo_users,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first to run)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-Total-Count",
            "Location",
        ],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `users_api.main:app` to be importable
app = create_app()
