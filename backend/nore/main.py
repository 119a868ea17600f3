"""Nore — FastAPI application with structured logging, CORS, and error handlers.

Routers built with `nore.routes.group` and guarded by
`nore.request.validation.validate_request` are mounted through `create_app`.
"""

import logging
import time
from typing import Optional, Sequence

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from nore import __version__
from nore.api.router import api_router
from nore.config import Settings, get_settings
from nore.errors import RequestValidationFailed
from nore.models.responses import ErrorResponse

logger = structlog.get_logger()

# Requests slower than this are logged even when they succeed
SLOW_REQUEST_SECONDS = 1.0

# Offending values from multipart bodies are reported by filename
VALUE_ENCODERS = {UploadFile: lambda upload: upload.filename}


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog: console output in debug, JSON lines otherwise."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


async def log_requests(request: Request, call_next):
    """Log failed and slow requests."""
    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            "request_failed",
            method=request.method,
            path=request.url.path,
            error=str(e),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        raise

    duration = time.perf_counter() - start_time
    if duration > SLOW_REQUEST_SECONDS or response.status_code >= 400:
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
    return response


async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
    """Answer 422 with the validation result."""
    return JSONResponse(status_code=422, content=jsonable_encoder(exc.result.model_dump(), custom_encoder=VALUE_ENCODERS))


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred. Please try again.",
        ).model_dump(),
    )


def create_app(routers: Optional[Sequence[APIRouter]] = None) -> FastAPI:
    """Build the application.

    Args:
        routers: Extra routers (route groups) to mount at the root
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Middleware ──

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    # ── Exception Handlers ──

    app.add_exception_handler(RequestValidationFailed, request_validation_failed_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # ── Routes ──

    app.include_router(api_router)
    for router in routers or []:
        app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint — API info."""
        return {
            "name": settings.APP_NAME,
            "version": __version__,
            "environment": settings.ENVIRONMENT,
            "docs": "/docs",
            "health": "/health",
        }

    return app


configure_logging()

app = create_app()
