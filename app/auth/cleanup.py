"""Background purge of expired revocation records."""

import asyncio
import contextlib
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.auth.token_revocation import TokenRevocationStore

logger = logging.getLogger(__name__)


class RevocationCleanupTask:
    """Runs ``TokenRevocationStore.purge_expired`` every *interval* seconds.

    Each iteration gets its own session. A failing iteration is logged and
    the loop carries on; only ``stop()`` ends it.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        interval: float = 300.0,
    ):
        self._session_factory = session_factory
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.warning("Revocation cleanup task is already running")
            return
        self._task = asyncio.create_task(self._loop(), name="revocation-cleanup")
        logger.info("Revocation cleanup task started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Revocation cleanup task stopped")

    async def run_once(self) -> int:
        """Purge expired records in a fresh session and commit."""
        async with self._session_factory() as session:
            removed = await TokenRevocationStore(session).purge_expired()
            await session.commit()
        if removed > 0:
            logger.info("Purged %d expired revocation records", removed)
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.run_once()
            except Exception:
                logger.exception("Error purging expired revocation records")
