"""JWT issuance/verification and password hashing.

Tokens are HS256-signed with the process-wide ``JWT_SECRET_KEY``. Every
issued token carries a fresh UUID4 ``jti`` so it can be revoked on its own
(see ``app.auth.token_revocation``).

``verify_token`` deliberately collapses every failure (bad signature,
expired, malformed, unexpected claim shape) into ``None`` so callers cannot
tell an expired token from a tampered one.
"""

import logging
import math
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.config import get_settings
from app.models.user import UserRole
from app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def issue_token(
    subject: str,
    role: str | UserRole,
    *,
    email: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Sign a new access token for *subject* with a fresh ``jti``.

    ``expires_in`` overrides the configured lifetime (``JWT_EXPIRES_IN``).
    """
    settings = get_settings()
    now = datetime.now(UTC)
    lifetime = expires_in if expires_in is not None else settings.jwt_expires_in
    payload: dict[str, Any] = {
        "sub": subject,
        "role": UserRole(role).value,
        "jti": str(uuid.uuid4()),
        "iat": now.timestamp(),
        "exp": math.ceil((now + lifetime).timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def verify_token(token: str) -> TokenClaims | None:
    """Return the verified claims of *token*, or ``None`` if it is not valid."""
    try:
        return TokenClaims.model_validate(decode_token(token))
    except (JWTError, ValidationError) as exc:
        logger.debug("Token verification failed: %s", type(exc).__name__)
        return None
