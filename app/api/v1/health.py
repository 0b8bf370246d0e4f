"""Health check endpoints.

``probe_router`` is mounted at the root for orchestrator probes; ``router``
lives under ``/api/v1`` next to the resource routers.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()
probe_router = APIRouter(tags=["Health"])

SERVICE_NAME = "kitapandu-api"
SERVICE_VERSION = "1.0.0"


@router.get("/ping")
async def ping() -> dict:
    """Simple ping endpoint for debugging."""
    return {"ping": "pong"}


@probe_router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check: is the process running?"""
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@probe_router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check: can the service reach its database?"""
    checks: dict[str, str] = {}

    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError):
        checks["database"] = "unavailable"

    cleanup = getattr(request.app.state, "revocation_cleanup", None)
    checks["revocation_cleanup"] = "ok" if cleanup is not None and cleanup.running else "stopped"

    ready = checks["database"] == "ok"
    payload = {"status": "ready" if ready else "degraded", "checks": checks}
    if not ready:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)
    return payload
