"""Database-backed JWT deny-list.

Allows individual tokens to be revoked before their natural expiry by
storing the token's ``jti`` (JWT ID) claim together with the token's own
expiry. Rows are removed lazily when looked up after they expire, and in bulk
by ``purge_expired`` (run periodically by ``RevocationCleanupTask``).

A user's tokens can also be revoked wholesale: ``revoke_all_for_owner``
writes one ``owner:<user id>`` row whose ``created_at`` acts as a cut-off,
and every token of that user issued up to the cut-off is rejected.

Usage from an endpoint::

    store = TokenRevocationStore(session)
    await store.revoke(claims.jti, claims.expires_at, owner_id=claims.sub)
    assert await store.is_revoked(claims.jti)
"""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.constants import OWNER_REVOCATION_PREFIX, REVOCATION_EXPIRING_SOON_HOURS
from app.models.base import as_utc
from app.models.token_blacklist import TokenBlacklist
from app.schemas.auth import RevocationStats

logger = logging.getLogger(__name__)


class TokenAlreadyRevokedError(Exception):
    """Raised when a ``jti`` is revoked twice."""

    def __init__(self, jti: str):
        self.jti = jti
        super().__init__(f"Token '{jti}' is already revoked")


def owner_revocation_key(owner_id: str) -> str:
    return f"{OWNER_REVOCATION_PREFIX}{owner_id}"


class TokenRevocationStore:
    """Data access layer for revoked tokens.

    Operations are single-row (insert, point lookup, delete) apart from the
    expiry purge, so no locking is needed: a lazy delete racing the purge
    deletes the same row at most once.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_live(self, key: str) -> TokenBlacklist | None:
        """Return the row for *key* unless it has expired (then delete it)."""
        record = await self.session.get(TokenBlacklist, key)
        if record is None:
            return None
        if as_utc(record.expires_at) < datetime.now(UTC):
            await self.session.execute(
                delete(TokenBlacklist)
                .where(TokenBlacklist.jti == key)
                .execution_options(synchronize_session=False)
            )
            self.session.expunge(record)
            logger.debug("Dropped expired revocation record %s on lookup", key)
            return None
        return record

    async def is_revoked(self, jti: str) -> bool:
        """Return ``True`` if *jti* has been revoked and the revocation is still live."""
        return await self._get_live(jti) is not None

    async def is_revoked_for_owner(self, owner_id: str, issued_at: datetime) -> bool:
        """Return ``True`` if *owner_id* had its tokens revoked at or after *issued_at*."""
        record = await self._get_live(owner_revocation_key(owner_id))
        if record is None:
            return False
        return as_utc(issued_at) <= as_utc(record.created_at)

    async def revoke(
        self, jti: str, expires_at: datetime, owner_id: str | None = None
    ) -> TokenBlacklist:
        """Add *jti* to the deny-list until *expires_at*.

        Raises:
            TokenAlreadyRevokedError: If the ``jti`` is already on the list.
        """
        if await self.session.get(TokenBlacklist, jti) is not None:
            raise TokenAlreadyRevokedError(jti)

        record = TokenBlacklist(jti=jti, owner_id=owner_id, expires_at=expires_at)
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise TokenAlreadyRevokedError(jti)
        logger.info("Token revoked jti=%s owner=%s", jti, owner_id)
        return record

    async def revoke_all_for_owner(self, owner_id: str) -> int:
        """Revoke every token issued to *owner_id* up to now.

        Replaces any earlier cut-off and removes the owner's per-token rows,
        which the new cut-off supersedes. The cut-off outlives every row it
        replaces. Returns the number of rows removed.
        """
        key = owner_revocation_key(owner_id)
        had_cutoff = await self.session.get(TokenBlacklist, key) is not None
        latest_expiry = await self.session.scalar(
            select(func.max(TokenBlacklist.expires_at)).where(
                TokenBlacklist.owner_id == owner_id
            )
        )
        result = await self.session.execute(
            delete(TokenBlacklist)
            .where(TokenBlacklist.owner_id == owner_id)
            .execution_options(synchronize_session="evaluate")
        )
        superseded = max((result.rowcount or 0) - int(had_cutoff), 0)

        now = datetime.now(UTC)
        expires_at = now + get_settings().jwt_expires_in
        if latest_expiry is not None:
            expires_at = max(expires_at, as_utc(latest_expiry))
        self.session.add(
            TokenBlacklist(jti=key, owner_id=owner_id, created_at=now, expires_at=expires_at)
        )
        await self.session.flush()
        logger.info("All tokens revoked owner=%s superseded=%d", owner_id, superseded)
        return superseded

    async def purge_expired(self) -> int:
        """Delete every row whose expiry has passed. Returns count removed.

        Best-effort: failures are logged and reported as zero removals.
        """
        try:
            result = await self.session.execute(
                delete(TokenBlacklist)
                .where(TokenBlacklist.expires_at < datetime.now(UTC))
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError:
            logger.exception("Failed to purge expired revocation records")
            await self.session.rollback()
            return 0
        return result.rowcount or 0

    async def stats(self) -> RevocationStats:
        now = datetime.now(UTC)
        total = await self.session.scalar(select(func.count()).select_from(TokenBlacklist)) or 0
        expiring_soon = (
            await self.session.scalar(
                select(func.count())
                .select_from(TokenBlacklist)
                .where(
                    TokenBlacklist.expires_at
                    <= now + timedelta(hours=REVOCATION_EXPIRING_SOON_HOURS)
                )
            )
            or 0
        )
        return RevocationStats(total=total, expiring_soon=expiring_soon, generated_at=now)
