"""Pydantic schemas for authentication."""

from datetime import UTC, datetime

from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole


class TokenClaims(BaseModel):
    """Verified payload of an access token. No DB query needed."""

    sub: str = Field(..., min_length=1)
    role: UserRole
    jti: str = Field(..., min_length=1)
    # Fractional NumericDate (microsecond precision)
    iat: float
    exp: int
    email: str | None = None

    model_config = {"frozen": True}

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=UTC)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=UTC)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SignupRequest(BaseModel):
    """Request schema for creating a staff account (admin only)."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.operator


class UserResponse(BaseModel):
    """Public user information. Never includes the password hash."""

    id: str
    email: EmailStr
    name: str
    role: UserRole
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=72)
    name: str | None = Field(None, min_length=1, max_length=255)
    role: UserRole | None = None
    is_active: bool | None = None


class TokenResponse(BaseModel):
    """Response schema for the login endpoint."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class RevokeTokenRequest(BaseModel):
    """Explicit revocation of a token other than the caller's own."""

    token: str = Field(..., min_length=1)


class RevokedTokenResponse(BaseModel):
    jti: str
    owner_id: str | None
    expires_at: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class OwnerRevocationResponse(BaseModel):
    owner_id: str
    revoked_before: datetime
    superseded: int


class RevocationStats(BaseModel):
    total: int
    expiring_soon: int
    generated_at: datetime


class MessageResponse(BaseModel):
    message: str
