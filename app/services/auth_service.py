"""Service layer for sign-in, sign-out and token revocation."""

import logging

from app.auth.security import hash_password, issue_token, verify_password, verify_token
from app.auth.token_revocation import TokenRevocationStore
from app.config import get_settings
from app.models.token_blacklist import TokenBlacklist
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import SignupRequest, TokenClaims, TokenResponse, UserResponse

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Unknown email or wrong password. Callers must not say which."""


class InactiveUserError(Exception):
    """The account exists but has been deactivated."""


class InvalidTokenError(Exception):
    """A token submitted for revocation does not verify."""


class AuthService:
    """Business logic behind ``/auth``."""

    def __init__(self, users: UserRepository, revocations: TokenRevocationStore):
        self._users = users
        self._revocations = revocations

    async def login(self, email: str, password: str) -> TokenResponse:
        """Check credentials and issue an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            InactiveUserError: Correct credentials for a deactivated account.
        """
        user = await self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise InvalidCredentialsError()
        if not user.is_active:
            raise InactiveUserError()

        settings = get_settings()
        token = issue_token(user.id, user.role, email=user.email)
        logger.info("User %s logged in", user.id)
        return TokenResponse(
            access_token=token,
            expires_in=settings.jwt_expires_in_seconds,
            user=UserResponse.model_validate(user),
        )

    async def logout(self, claims: TokenClaims) -> TokenBlacklist:
        """Revoke the caller's own token until it would have expired."""
        return await self._revocations.revoke(claims.jti, claims.expires_at, owner_id=claims.sub)

    async def revoke_token(self, token: str) -> TokenBlacklist:
        """Revoke an arbitrary token presented by an administrator.

        Raises:
            InvalidTokenError: The token does not verify (already expired
                tokens need no revocation).
            TokenAlreadyRevokedError: The token is already on the deny-list.
        """
        claims = verify_token(token)
        if claims is None:
            raise InvalidTokenError()
        return await self._revocations.revoke(claims.jti, claims.expires_at, owner_id=claims.sub)

    async def signup(self, data: SignupRequest) -> User:
        """Create a staff account.

        Raises:
            DuplicateRecordError: The email is already registered.
        """
        return await self._users.create(
            {
                "email": data.email.lower(),
                "name": data.name,
                "password_hash": hash_password(data.password),
                "role": data.role,
            }
        )
