"""FastAPI dependencies for authentication and RBAC.

Every guarded request walks the same checks in order and stops at the first
failure:

1. no ``Authorization`` header             -> 401 missing-credential
2. header is not ``Bearer <token>``        -> 401 malformed-credential
3. signature/expiry/claims do not verify   -> 401 invalid-or-expired
4. ``jti`` (or the owner's tokens) revoked -> 401 revoked
5. role outside the permitted set          -> 403 insufficient-role

Anything unexpected along the way is a 500 internal-error; it never admits.
"""

import logging
from enum import StrEnum
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from app.auth.security import verify_token
from app.dependencies import RevocationStoreDep
from app.models.user import UserRole
from app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# APIKeyHeader rather than HTTPBearer so a missing header and a malformed one
# can be told apart.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer access token from POST /api/v1/auth/login",
)


class GuardRejection(StrEnum):
    MISSING_CREDENTIAL = "missing-credential"
    MALFORMED_CREDENTIAL = "malformed-credential"
    INVALID_OR_EXPIRED = "invalid-or-expired"
    REVOKED = "revoked"
    INSUFFICIENT_ROLE = "insufficient-role"
    INTERNAL_ERROR = "internal-error"


_REJECTIONS: dict[GuardRejection, tuple[int, str]] = {
    GuardRejection.MISSING_CREDENTIAL: (
        status.HTTP_401_UNAUTHORIZED,
        "Not authenticated",
    ),
    GuardRejection.MALFORMED_CREDENTIAL: (
        status.HTTP_401_UNAUTHORIZED,
        "Invalid authorization header",
    ),
    GuardRejection.INVALID_OR_EXPIRED: (
        status.HTTP_401_UNAUTHORIZED,
        "Invalid or expired token",
    ),
    GuardRejection.REVOKED: (
        status.HTTP_401_UNAUTHORIZED,
        "Token has been revoked",
    ),
    GuardRejection.INSUFFICIENT_ROLE: (
        status.HTTP_403_FORBIDDEN,
        "Insufficient permissions",
    ),
    GuardRejection.INTERNAL_ERROR: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
    ),
}


class AccessDenied(HTTPException):
    """HTTP rejection carrying the guard outcome in ``reason``."""

    def __init__(self, reason: GuardRejection):
        status_code, detail = _REJECTIONS[reason]
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.reason = reason


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token part of an ``Authorization`` header value.

    Raises:
        AccessDenied: missing-credential or malformed-credential.
    """
    if not authorization:
        raise AccessDenied(GuardRejection.MISSING_CREDENTIAL)
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise AccessDenied(GuardRejection.MALFORMED_CREDENTIAL)
    return token


async def get_current_user(
    authorization: Annotated[str | None, Depends(authorization_header)],
    store: RevocationStoreDep,
) -> TokenClaims:
    """Verify the bearer token and check it against the revocation store."""
    try:
        token = extract_bearer_token(authorization)
        claims = verify_token(token)
        if claims is None:
            raise AccessDenied(GuardRejection.INVALID_OR_EXPIRED)
        if await store.is_revoked(claims.jti) or await store.is_revoked_for_owner(
            claims.sub, claims.issued_at
        ):
            raise AccessDenied(GuardRejection.REVOKED)
    except AccessDenied as exc:
        logger.debug("Access rejected: %s", exc.reason)
        raise
    except Exception as exc:
        logger.exception("Access guard failed while authenticating request")
        raise AccessDenied(GuardRejection.INTERNAL_ERROR) from exc
    return claims


# Convenience type alias
CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]


def require_role(*allowed_roles: str | UserRole):
    """Dependency factory that enforces role-based access.

    The admitted claims are returned and stored on ``request.state.user``.

    Usage:
        @router.post("/students", dependencies=[Depends(require_role("admin", "operator"))])
    """
    allowed = frozenset(UserRole(r) for r in allowed_roles)

    async def _check_role(request: Request, current_user: CurrentUser) -> TokenClaims:
        if current_user.role not in allowed:
            logger.debug("Access rejected: %s", GuardRejection.INSUFFICIENT_ROLE)
            raise AccessDenied(GuardRejection.INSUFFICIENT_ROLE)
        request.state.user = current_user
        return current_user

    return _check_role


admin_only = require_role(UserRole.admin)
staff = require_role(UserRole.admin, UserRole.operator)

AdminUser = Annotated[TokenClaims, Depends(admin_only)]
StaffUser = Annotated[TokenClaims, Depends(staff)]
