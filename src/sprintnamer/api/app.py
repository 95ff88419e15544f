"""FastAPI application for the sprint namer."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from sprintnamer import __version__
from sprintnamer.config import Settings
from sprintnamer.exceptions import (
    AuthenticationError,
    CapacityExceededError,
    ConfigurationError,
    InvalidInputError,
    SprintNamerError,
    UpstreamError,
)
from sprintnamer.logging import configure_logging, get_logger, request_context
from sprintnamer.service import SprintNamerService

from .auth import AUTOMATIONS_TOKEN_HEADER
from .helpers import REQUEST_ID_HEADER, new_request_id
from .router import SIGNATURE_HEADER, router, system_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan.

    Creates the SprintNamerService on startup (unless one was injected) and
    drains background jobs on shutdown.
    """
    settings: Settings = app.state.settings

    configure_logging(level=settings.log_level, format=settings.log_format)
    logger.info(
        "Starting sprint namer API",
        log_level=settings.log_level,
        log_format=settings.log_format,
        env=settings.env,
    )

    owns_service = getattr(app.state, "service", None) is None
    if owns_service:
        app.state.service = SprintNamerService.create(settings)

    yield

    if owns_service:
        await app.state.service.close()
        app.state.service = None


def create_app(
    settings: Settings | None = None,
    service: SprintNamerService | None = None,
) -> FastAPI:
    """Create a FastAPI application.

    Args:
        settings: Optional settings. Uses environment if None.
        service: Optional pre-built service. Built at startup if None.

    Returns:
        Configured FastAPI application.

    Example:
        ```python
        from sprintnamer.api import create_app

        app = create_app()
        # Run with: uvicorn sprintnamer.api:app --reload
        ```
    """
    if settings is None:
        settings = service.settings if service is not None else Settings()

    app = FastAPI(
        title="Sprint Namer",
        description="Deterministic sprint names for Notion pages.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.service = service

    @app.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Assign a request id and emit one structured log line per request."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request.state.request_id = request_id
        start = time.perf_counter()
        status_code = 500
        with request_context(request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
                response.headers["X-Request-ID"] = request_id
                return response
            finally:
                logger.info(
                    "Request handled",
                    method=request.method,
                    path=request.url.path,
                    status=status_code,
                    latency_ms=round((time.perf_counter() - start) * 1000),
                )

    # Register exception handlers
    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        """Handle invalid input with 400 status."""
        logger.info("Invalid input", field=exc.field, error=exc.message, path=request.url.path)
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle authentication errors with 401 status."""
        logger.warning(
            "Authentication failed",
            error=exc.message,
            path=request.url.path,
            automations_token=request.headers.get(AUTOMATIONS_TOKEN_HEADER),
            notion_signature=request.headers.get(SIGNATURE_HEADER),
        )
        return JSONResponse(status_code=401, content=exc.to_dict())

    @app.exception_handler(CapacityExceededError)
    async def capacity_error_handler(request: Request, exc: CapacityExceededError) -> JSONResponse:
        """Handle a saturated dispatcher with 429 status."""
        logger.warning(
            "Dispatcher saturated",
            pending=exc.pending,
            max_pending=exc.max_pending,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=429,
            content=exc.to_dict(),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        """Handle Notion API failures with 502 status."""
        logger.error(
            "Upstream error",
            error=exc.message,
            status=exc.status,
            body=exc.body,
            path=request.url.path,
        )
        return JSONResponse(status_code=502, content=exc.to_dict())

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Handle configuration errors with 500 status."""
        logger.error("Configuration error", error=exc.message, path=request.url.path)
        return JSONResponse(status_code=500, content=exc.to_dict())

    @app.exception_handler(SprintNamerError)
    async def sprint_namer_error_handler(request: Request, exc: SprintNamerError) -> JSONResponse:
        """Handle all other sprint namer errors with 500 status."""
        logger.error("Unhandled error", error=exc.message, code=exc.code, path=request.url.path)
        return JSONResponse(status_code=500, content=exc.to_dict())

    app.include_router(system_router)
    app.include_router(router, prefix="/v1/notion")

    return app


# Default app instance for uvicorn
app = create_app()
