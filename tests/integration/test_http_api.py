"""Integration tests for probes, middleware and error handling."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.auth.token_revocation import TokenRevocationStore
from app.dependencies import get_revocation_store
from app.main import app
from tests.conftest import auth_headers

pytestmark = pytest.mark.asyncio


class TestProbes:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.json()["service"] == "kitapandu-api"

    async def test_ready(self, client):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"] == "ok"

    async def test_ready_reports_cleanup_loop(self, client):
        cleanup = MagicMock(running=True)
        app.state.revocation_cleanup = cleanup
        try:
            resp = await client.get("/ready")
        finally:
            del app.state.revocation_cleanup
        assert resp.json()["checks"]["revocation_cleanup"] == "ok"

    async def test_ready_degraded_without_database(self, client):
        healthy_factory = app.state.session_factory
        broken = MagicMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))
        app.state.session_factory = broken
        try:
            resp = await client.get("/ready")
        finally:
            app.state.session_factory = healthy_factory
        assert resp.status_code == 503
        assert resp.json()["checks"]["database"] == "unavailable"

    async def test_ping(self, client):
        resp = await client.get("/api/v1/ping")
        assert resp.json() == {"ping": "pong"}


class TestMiddleware:
    async def test_request_id_generated(self, client):
        resp = await client.get("/health")
        assert len(resp.headers["x-request-id"]) == 36

    async def test_request_id_propagated(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert resp.headers["x-request-id"] == "req-123"

    async def test_unsafe_request_id_replaced(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "bad id <x>"})
        assert resp.headers["x-request-id"] != "bad id <x>"
        assert len(resp.headers["x-request-id"]) == 36

    async def test_security_headers(self, client):
        resp = await client.get("/health")
        assert resp.headers["x-content-type-options"] == "nosniff"
        assert resp.headers["x-frame-options"] == "DENY"

    async def test_cors_preflight(self, client):
        resp = await client.options(
            "/api/v1/announcements",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "PUT",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrors:
    async def test_unknown_route(self, client):
        resp = await client.get("/api/v1/nope")
        assert resp.status_code == 404

    async def test_guard_failure_is_500_not_admitted(self, client, users):
        broken = AsyncMock(spec=TokenRevocationStore)
        broken.is_revoked.side_effect = RuntimeError("connection reset")
        app.dependency_overrides[get_revocation_store] = lambda: broken
        try:
            resp = await client.get("/api/v1/auth/me", headers=auth_headers(users.admin))
        finally:
            app.dependency_overrides.pop(get_revocation_store, None)
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal server error"}
