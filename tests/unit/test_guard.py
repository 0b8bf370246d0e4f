"""Unit tests for auth/dependencies.py: the access guard and RBAC."""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import status

from app.auth.dependencies import (
    AccessDenied,
    GuardRejection,
    admin_only,
    extract_bearer_token,
    get_current_user,
    require_role,
    staff,
)
from app.auth.security import issue_token, verify_token
from app.auth.token_revocation import TokenRevocationStore


def _store(*, revoked: bool = False, owner_revoked: bool = False) -> AsyncMock:
    store = AsyncMock(spec=TokenRevocationStore)
    store.is_revoked.return_value = revoked
    store.is_revoked_for_owner.return_value = owner_revoked
    return store


def _bearer(role: str = "operator", **kwargs) -> str:
    return f"Bearer {issue_token('user-1', role, **kwargs)}"


def _fake_request():
    return SimpleNamespace(state=SimpleNamespace())


class TestExtractBearerToken:
    def test_returns_token(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"
        assert extract_bearer_token("BEARER abc") == "abc"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing(self, header):
        with pytest.raises(AccessDenied) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.reason is GuardRejection.MISSING_CREDENTIAL

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Basic abc", "abc", "Bearer a b"])
    def test_malformed(self, header):
        with pytest.raises(AccessDenied) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.reason is GuardRejection.MALFORMED_CREDENTIAL


class TestGetCurrentUser:
    async def test_valid_token_returns_claims(self):
        claims = await get_current_user(_bearer("admin"), _store())
        assert claims.sub == "user-1"
        assert claims.role == "admin"

    async def test_checks_jti_and_owner(self):
        store = _store()
        header = _bearer()
        claims = await get_current_user(header, store)

        store.is_revoked.assert_awaited_once_with(claims.jti)
        store.is_revoked_for_owner.assert_awaited_once_with("user-1", claims.issued_at)

    async def test_missing_header_is_401_with_challenge(self):
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user(None, _store())
        exc = exc_info.value
        assert exc.reason is GuardRejection.MISSING_CREDENTIAL
        assert exc.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    async def test_malformed_header(self):
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user("Token abc", _store())
        assert exc_info.value.reason is GuardRejection.MALFORMED_CREDENTIAL

    async def test_invalid_token(self):
        store = _store()
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user("Bearer not.a.jwt", store)
        assert exc_info.value.reason is GuardRejection.INVALID_OR_EXPIRED
        store.is_revoked.assert_not_awaited()

    async def test_expired_token(self):
        header = _bearer(expires_in=timedelta(seconds=-30))
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user(header, _store())
        assert exc_info.value.reason is GuardRejection.INVALID_OR_EXPIRED

    async def test_revoked_jti(self):
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user(_bearer(), _store(revoked=True))
        assert exc_info.value.reason is GuardRejection.REVOKED
        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_revoked_owner(self):
        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user(_bearer(), _store(owner_revoked=True))
        assert exc_info.value.reason is GuardRejection.REVOKED

    async def test_store_failure_is_internal_error(self):
        store = _store()
        store.is_revoked.side_effect = RuntimeError("connection reset")

        with pytest.raises(AccessDenied) as exc_info:
            await get_current_user(_bearer(), store)
        exc = exc_info.value
        assert exc.reason is GuardRejection.INTERNAL_ERROR
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.headers is None


class TestRequireRole:
    async def test_admin_passes_admin_only(self):
        claims = verify_token(issue_token("user-1", "admin"))
        request = _fake_request()

        assert await admin_only(request, claims) is claims
        assert request.state.user is claims

    async def test_operator_rejected_by_admin_only(self):
        claims = verify_token(issue_token("user-1", "operator"))
        with pytest.raises(AccessDenied) as exc_info:
            await admin_only(_fake_request(), claims)
        exc = exc_info.value
        assert exc.reason is GuardRejection.INSUFFICIENT_ROLE
        assert exc.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.parametrize("role", ["admin", "operator"])
    async def test_staff_admits_both_roles(self, role):
        claims = verify_token(issue_token("user-1", role))
        assert await staff(_fake_request(), claims) is claims

    def test_unknown_role_rejected_at_definition(self):
        with pytest.raises(ValueError):
            require_role("viewer")
