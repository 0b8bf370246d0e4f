"""Unit tests for the database-backed revocation store."""

import asyncio
import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.auth.security import issue_token, verify_token
from app.auth.token_revocation import (
    TokenAlreadyRevokedError,
    TokenRevocationStore,
    owner_revocation_key,
)
from app.models.base import as_utc
from app.models.token_blacklist import TokenBlacklist

pytestmark = pytest.mark.asyncio


def _jti() -> str:
    return str(uuid.uuid4())


def _in(**delta) -> datetime:
    return datetime.now(UTC) + timedelta(**delta)


async def _row_count(session) -> int:
    return await session.scalar(select(func.count()).select_from(TokenBlacklist))


class TestRevoke:
    async def test_revoked_token_is_reported(self, db_session):
        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, _in(hours=1))

        assert await store.is_revoked(jti)

    async def test_unknown_token_is_not_revoked(self, db_session):
        assert not await TokenRevocationStore(db_session).is_revoked(_jti())

    async def test_records_owner(self, db_session):
        record = await TokenRevocationStore(db_session).revoke(
            _jti(), _in(hours=1), owner_id="user-1"
        )
        assert record.owner_id == "user-1"
        assert record.created_at is not None

    async def test_revoking_twice_raises(self, db_session):
        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, _in(hours=1))

        with pytest.raises(TokenAlreadyRevokedError) as exc_info:
            await store.revoke(jti, _in(hours=2))
        assert exc_info.value.jti == jti

    async def test_revocation_visible_from_other_sessions(self, session_factory):
        jti = _jti()
        async with session_factory() as session:
            await TokenRevocationStore(session).revoke(jti, _in(hours=1))
            await session.commit()

        async with session_factory() as session:
            assert await TokenRevocationStore(session).is_revoked(jti)


class TestLazyExpiry:
    async def test_expired_record_is_not_revoked_and_is_removed(self, db_session):
        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, _in(seconds=-1))

        assert not await store.is_revoked(jti)
        assert await db_session.get(TokenBlacklist, jti) is None
        assert await _row_count(db_session) == 0

    async def test_revocation_lapses_when_token_expires(self, db_session):
        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, _in(seconds=1))
        assert await store.is_revoked(jti)

        await asyncio.sleep(1.1)

        assert not await store.is_revoked(jti)
        assert await _row_count(db_session) == 0

    async def test_record_expiring_now_is_still_live(self, db_session):
        frozen = datetime.now(UTC).replace(microsecond=0) + timedelta(minutes=5)

        class FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                return frozen

        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, frozen)

        with patch("app.auth.token_revocation.datetime", FrozenDatetime):
            assert await store.purge_expired() == 0
            assert await store.is_revoked(jti)

    async def test_expired_jti_can_be_revoked_again(self, db_session):
        store = TokenRevocationStore(db_session)
        jti = _jti()
        await store.revoke(jti, _in(seconds=-1))
        assert not await store.is_revoked(jti)

        await store.revoke(jti, _in(hours=1))
        assert await store.is_revoked(jti)


class TestPurgeExpired:
    async def test_removes_only_expired_records(self, db_session):
        store = TokenRevocationStore(db_session)
        live = _jti()
        await store.revoke(_jti(), _in(minutes=-5))
        await store.revoke(_jti(), _in(seconds=-1))
        await store.revoke(live, _in(hours=1))

        assert await store.purge_expired() == 2
        assert await _row_count(db_session) == 1
        assert await store.is_revoked(live)

    async def test_second_purge_finds_nothing(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke(_jti(), _in(seconds=-1))

        assert await store.purge_expired() == 1
        assert await store.purge_expired() == 0

    async def test_database_error_reports_zero(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("DELETE", {}, Exception("db down"))

        assert await TokenRevocationStore(session).purge_expired() == 0
        session.rollback.assert_awaited_once()


class TestRevokeAllForOwner:
    async def test_tokens_issued_before_cutoff_are_revoked(self, db_session):
        store = TokenRevocationStore(db_session)
        issued_at = datetime.now(UTC).replace(microsecond=0) - timedelta(minutes=10)

        await store.revoke_all_for_owner("user-1")

        assert await store.is_revoked_for_owner("user-1", issued_at)

    async def test_cutoff_has_sub_second_precision(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        record = await db_session.get(TokenBlacklist, owner_revocation_key("user-1"))
        cutoff = as_utc(record.created_at)

        assert await store.is_revoked_for_owner("user-1", cutoff)
        assert await store.is_revoked_for_owner("user-1", cutoff - timedelta(milliseconds=1))
        assert not await store.is_revoked_for_owner(
            "user-1", cutoff + timedelta(milliseconds=1)
        )

    async def test_token_issued_right_after_cutoff_is_accepted(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        claims = verify_token(issue_token("user-1", "operator"))

        assert claims is not None
        assert not await store.is_revoked_for_owner(claims.sub, claims.issued_at)

    async def test_later_tokens_are_accepted(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        assert not await store.is_revoked_for_owner("user-1", _in(seconds=2))

    async def test_other_owners_unaffected(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        assert not await store.is_revoked_for_owner("user-2", _in(minutes=-10))

    async def test_supersedes_per_token_records(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke(_jti(), _in(hours=1), owner_id="user-1")
        await store.revoke(_jti(), _in(hours=1), owner_id="user-1")
        await store.revoke(_jti(), _in(hours=1), owner_id="user-2")

        assert await store.revoke_all_for_owner("user-1") == 2
        # user-1's cut-off plus user-2's token
        assert await _row_count(db_session) == 2

    async def test_repeat_replaces_cutoff(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        assert await store.revoke_all_for_owner("user-1") == 0
        assert await _row_count(db_session) == 1

    async def test_cutoff_lives_for_a_token_lifetime(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke_all_for_owner("user-1")

        record = await db_session.get(TokenBlacklist, owner_revocation_key("user-1"))
        lifetime = record.expires_at - record.created_at
        assert lifetime == timedelta(days=7)

    async def test_cutoff_outlives_superseded_records(self, db_session):
        store = TokenRevocationStore(db_session)
        long_lived = _in(days=30)
        await store.revoke(_jti(), long_lived, owner_id="user-1")

        await store.revoke_all_for_owner("user-1")

        record = await db_session.get(TokenBlacklist, owner_revocation_key("user-1"))
        assert as_utc(record.expires_at) == long_lived


class TestStats:
    async def test_counts_total_and_expiring_soon(self, db_session):
        store = TokenRevocationStore(db_session)
        await store.revoke(_jti(), _in(hours=2))
        await store.revoke(_jti(), _in(hours=20))
        await store.revoke(_jti(), _in(days=3))

        stats = await store.stats()

        assert stats.total == 3
        assert stats.expiring_soon == 2

    async def test_empty_store(self, db_session):
        stats = await TokenRevocationStore(db_session).stats()
        assert stats.total == 0
        assert stats.expiring_soon == 0


class TestIssuedTokenLifecycle:
    async def test_short_lived_token_revocation_lapses(self, db_session):
        store = TokenRevocationStore(db_session)
        claims = verify_token(issue_token("u1", "operator", expires_in=timedelta(seconds=1)))
        assert claims is not None
        assert claims.sub == "u1"
        assert claims.role == "operator"

        assert not await store.is_revoked(claims.jti)

        await store.revoke(claims.jti, _in(seconds=1), owner_id=claims.sub)
        assert await store.is_revoked(claims.jti)

        await asyncio.sleep(1.1)

        assert not await store.is_revoked(claims.jti)
        remaining = await db_session.scalar(
            select(func.count())
            .select_from(TokenBlacklist)
            .where(TokenBlacklist.jti == claims.jti)
        )
        assert remaining == 0
