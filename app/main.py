"""FastAPI application entry point."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.api.v1.health import SERVICE_VERSION, probe_router
from app.api.v1.router import api_router
from app.auth.cleanup import RevocationCleanupTask
from app.config import get_settings
from app.dependencies import create_engine, create_session_factory
from app.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from app.rate_limit import limiter
from app.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the database engine and the revocation purge loop."""
    settings = get_settings()
    logger.info("Starting kitapandu API (environment=%s)", settings.environment)

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    cleanup = RevocationCleanupTask(
        app.state.session_factory,
        interval=settings.revocation_cleanup_interval_seconds,
    )
    cleanup.start()
    app.state.revocation_cleanup = cleanup

    try:
        yield
    finally:
        # The purge loop uses the engine, so it stops first
        try:
            await cleanup.stop()
        finally:
            await engine.dispose()
        logger.info("kitapandu API stopped")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and answer with a generic 500."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_application() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Kitapandu API",
        description=(
            "Back office for community learning programs: students, classes, "
            "mentors, schedules, announcements and donations."
        ),
        version=SERVICE_VERSION,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    # slowapi handler signature is narrower than Starlette expects
    app.add_exception_handler(
        RateLimitExceeded,
        _rate_limit_exceeded_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Last added runs first: CORS answers preflights before anything else
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    app.include_router(probe_router)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_application()
