"""Revoked JWT identifiers."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, utcnow


class TokenBlacklist(Base):
    """A revoked token identified by its ``jti`` claim.

    Rows are written on logout or explicit revocation and are never updated.
    They are removed lazily when looked up after ``expires_at`` or by the
    periodic purge. A row keyed ``owner:<user id>`` revokes every token that
    user was issued up to ``created_at``.
    """

    __tablename__ = "token_blacklist"

    jti: Mapped[str] = mapped_column(String(191), primary_key=True)
    owner_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<TokenBlacklist {self.jti} until {self.expires_at}>"
