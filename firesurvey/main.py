"""
Fire Survey Backend: FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`uvicorn firesurvey.main:app` or `python -m firesurvey`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │ Req ID   │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  POST /submitSurvey   GET|POST /fire-alert          │
    │  GET /downloadAccess  POST /generate                │
    │  GET /ping            GET /health                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Duplicate→409      │
    │  NoRecords/DB/Generation/unexpected→500             │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the database, ping it, create the survey table if missing
       (any failure here is fatal: the error propagates and uvicorn exits)

    Shutdown:
    1. Close the generation service's HTTP client
    2. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from firesurvey import __version__
from firesurvey.config import settings
from firesurvey.database import dispose_engine, init_database
from firesurvey.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    GenerationServiceError,
    NoSurveyRecordsError,
    NotFoundError,
    ValidationError,
)
from firesurvey.middleware.logging import RequestLoggingMiddleware
from firesurvey.middleware.request_id import RequestIDMiddleware, request_id_var
from firesurvey.routes import alert, export, generate, health, survey
from firesurvey.schemas.common import ErrorResponse
from firesurvey.services.ollama_service import ollama_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] firesurvey.access: POST /submitSurvey 200 ...
    Called once during app startup, before any other initialization.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries log every query / connection at INFO or DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then the database. Shutdown: HTTP client, then engine.

    There is no degraded mode: if the database cannot be opened the
    exception escapes the lifespan and the server refuses to start.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Fire Survey Backend starting up...")

    try:
        await init_database()
    except Exception as e:
        logger.critical("Cannot open database %s: %s", settings.database_url, str(e))
        raise

    logger.info("Generation proxy: %s (model=%s)", settings.generation_url, settings.generation_model)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Fire Survey Backend shutting down...")
    await ollama_service.aclose()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON error bodies.

    Handler table:
        ValidationError / RequestValidationError → 400 Bad Request
        NotFoundError                            → 404 Not Found
        DuplicateEmailError                      → 409 Conflict
        NoSurveyRecordsError                     → 500
        DatabaseError                            → 500 (generic message)
        GenerationServiceError                   → 500
        Exception (fallback)                     → 500 (generic message)

    Internal details (SQL, stack traces, upstream URLs) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, details=exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Unparseable JSON, missing fields and wrong JSON types all map to 400."""
        logger.warning("[%s] Invalid request body for %s", request_id_var.get(""), request.url.path)
        return _error_response(
            400,
            "validation_error",
            "Request body is not valid JSON or has missing/invalid fields",
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(DuplicateEmailError)
    async def handle_duplicate_email(request: Request, exc: DuplicateEmailError):
        return _error_response(409, "duplicate_email", exc.message)

    @app.exception_handler(NoSurveyRecordsError)
    async def handle_no_records(request: Request, exc: NoSurveyRecordsError):
        return _error_response(500, "no_survey_records", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(GenerationServiceError)
    async def handle_generation_error(request: Request, exc: GenerationServiceError):
        logger.error(
            "[%s] Generation service error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error_response(500, "generation_service_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Served by Starlette's outermost ServerErrorMiddleware, outside
        RequestIDMiddleware, so the X-Request-ID header is set here.
        """
        rid = request_id_var.get("") or getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Fire Survey API",
        description=(
            "Collects fire-safety surveys, reports the latest address to the alarm "
            "device, exports the survey database and proxies prompts to a local "
            "language model."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → route.

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(survey.router)
    app.include_router(alert.router)
    app.include_router(export.router)
    app.include_router(generate.router)
    app.include_router(health.router)

    return app


app = create_app()
