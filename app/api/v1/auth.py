"""Authentication API endpoints.

Tokens are issued here and validated statelessly by the access guard; the
only server-side state is the revocation deny-list written by ``/logout``
and ``/revoke``.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.auth.dependencies import StaffUser, admin_only
from app.auth.token_revocation import TokenAlreadyRevokedError
from app.dependencies import RevocationStoreDep
from app.providers import AuthSvc, UserRepo
from app.rate_limit import limiter, login_rate_limit
from app.repositories.base import DuplicateRecordError
from app.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RevocationStats,
    RevokedTokenResponse,
    RevokeTokenRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from app.services.auth_service import (
    InactiveUserError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from app.utils.audit import audit_logged

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limiter.limit(login_rate_limit)
async def login(request: Request, credentials: LoginRequest, service: AuthSvc) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    try:
        return await service.login(credentials.email, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InactiveUserError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: StaffUser, service: AuthSvc) -> MessageResponse:
    """Revoke the presented token. It is rejected from now until it expires."""
    await service.logout(current_user)
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_only), Depends(audit_logged("create_user"))],
)
async def signup(data: SignupRequest, service: AuthSvc) -> UserResponse:
    """Create a staff account."""
    try:
        user = await service.signup(data)
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Email '{data.email}' is already registered",
        )
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: StaffUser, users: UserRepo) -> UserResponse:
    """Return the authenticated user's profile."""
    user = await users.get_by_id(current_user.sub)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.post(
    "/revoke",
    response_model=RevokedTokenResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_only), Depends(audit_logged("revoke_token"))],
)
async def revoke_token(data: RevokeTokenRequest, service: AuthSvc) -> RevokedTokenResponse:
    """Revoke someone else's token before it expires."""
    try:
        record = await service.revoke_token(data.token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Token is invalid or already expired",
        )
    except TokenAlreadyRevokedError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Token is already revoked",
        )
    return RevokedTokenResponse.model_validate(record)


@router.get(
    "/revocations/stats",
    response_model=RevocationStats,
    dependencies=[Depends(admin_only)],
)
async def revocation_stats(store: RevocationStoreDep) -> RevocationStats:
    """Size of the deny-list and how much of it lapses within a day."""
    return await store.stats()
