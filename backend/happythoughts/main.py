"""
Happy Thoughts API — FastAPI Application Factory
=================================================

What:  Builds and configures the FastAPI application.
How:   create_app(settings) constructs the Database and the services once,
       stores them on app.state, registers middleware, exception handlers and
       routers, and returns the app. Handlers reach the shared objects through
       the dependencies in dependencies.py.
Who:   uvicorn (`happythoughts.main:app` or the `happythoughts` console
       script) and the test suite, which builds apps against SQLite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Rate Limit  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌──────────────────┐ │
    │  │  /thoughts   │ │  /dogs   │ │ /users  /health  │ │
    │  └──────────────┘ └──────────┘ └──────────────────┘ │
    │                                                     │
    │  Exception Handlers (all render envelopes):         │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→500 │ NotFound→404 │ Auth→401     │   │
    │  │ Duplicate→400  │ Database→500 │ Other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create tables (CREATE_TABLES) → reset + seed (RESET_DB)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from happythoughts import __version__
from happythoughts.config import Settings, settings as default_settings
from happythoughts.database import Database
from happythoughts.exceptions import (
    AuthError,
    DatabaseError,
    DuplicateError,
    HappyThoughtsError,
    NoMatchesError,
    NotFoundError,
    ValidationError,
)
from happythoughts.middleware.logging import RequestLoggingMiddleware
from happythoughts.middleware.rate_limit import RateLimitMiddleware
from happythoughts.middleware.request_id import RequestIDMiddleware, request_id_var
from happythoughts.routes import dogs, health, thoughts, users
from happythoughts.services.dog_service import DogService
from happythoughts.services.seed import reset_database
from happythoughts.services.thought_service import ThoughtService
from happythoughts.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once at startup.

    Format: 2024-01-15T12:00:00 [INFO] happythoughts.access: GET /thoughts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Happy Thoughts API %s starting up...", __version__)

    if config.create_tables:
        await database.create_all()
    if config.reset_database:
        logger.warning("RESET_DB is set: wiping and reseeding dogs and thoughts")
        await reset_database(database)

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Happy Thoughts API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_envelope(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    response: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Render a failure as {"success": false, "response": ..., "message": ...}.

    `response` defaults to an ErrorDetail-shaped dict carrying the error code
    and the request ID.
    """
    if response is None:
        response = {"error": error, "request_id": request_id_var.get("")}
        if details:
            response["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "response": response, "message": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and envelopes.

    Handler hierarchy:
        ValidationError, RequestValidationError → 500
        NoMatchesError                          → 404, response []
        NotFoundError                           → 404
        AuthError                               → 401
        DuplicateError                          → 400
        DatabaseError, HappyThoughtsError       → 500 (generic message)
        Exception                               → 500 (stack trace logged)

    Validation failures answer 500 because existing clients treat every
    failed create/update as a server error.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_envelope(500, "validation_error", exc.message, details=exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return error_envelope(
            500,
            "validation_error",
            "The request did not pass validation",
            details={"errors": errors},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        if isinstance(exc, NoMatchesError):
            return error_envelope(404, "no_matches", exc.message, response=[])
        return error_envelope(404, "not_found", exc.message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        return error_envelope(
            401, "unauthorized", exc.message, headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(DuplicateError)
    async def handle_duplicate(request: Request, exc: DuplicateError):
        details = {"field": exc.field} if exc.field else None
        return error_envelope(400, "duplicate", exc.message, details=details)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_envelope(500, "server_error", exc.message)

    @app.exception_handler(HappyThoughtsError)
    async def handle_app_error(request: Request, exc: HappyThoughtsError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_envelope(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_envelope(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded
                  `happythoughts.config.settings`.

    Returns:
        A FastAPI instance whose app.state holds settings, database and the
        thought/dog/user services.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Happy Thoughts & Dogs API",
        description=(
            "Post happy thoughts and heart the ones you like, browse and like dogs, "
            "and register to get an access token for authenticated posting."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.thought_service = ThoughtService()
    app.state.dog_service = DogService()
    app.state.user_service = UserService()

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window,
        )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(thoughts.router)
    app.include_router(dogs.router)
    app.include_router(users.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on BACKEND_HOST:PORT."""
    uvicorn.run(
        "happythoughts.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
