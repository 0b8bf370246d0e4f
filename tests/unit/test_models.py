"""Unit tests for database models and enums."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.models import (
    AnnouncementCategory,
    ClassStatus,
    DonationStatus,
    EnrollmentStatus,
    Student,
    TokenBlacklist,
    User,
    UserRole,
)
from app.models.base import as_utc


class TestEnums:
    def test_user_roles(self):
        assert {r.value for r in UserRole} == {"admin", "operator"}

    def test_enrollment_statuses(self):
        assert [s.value for s in EnrollmentStatus] == [
            "registered",
            "confirmed",
            "active",
            "dropped",
            "rejected",
            "completed",
        ]

    def test_announcement_categories(self):
        assert {c.value for c in AnnouncementCategory} == {"jadwal", "libur", "event", "umum"}

    def test_class_and_donation_statuses(self):
        assert ClassStatus("inactive") == ClassStatus.INACTIVE
        assert DonationStatus.UPCOMING == "upcoming"


class TestAsUtc:
    def test_naive_values_become_utc(self):
        assert as_utc(datetime(2025, 1, 1)).tzinfo is UTC

    def test_aware_values_unchanged(self):
        value = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=7)))
        assert as_utc(value) is value
        assert as_utc(value) != value.replace(tzinfo=UTC)


class TestPersistence:
    async def test_ids_and_timestamps_generated(self, db_session):
        student = Student(
            student_name="Ali", student_age=8, parent_name="Bapak Ali", whatsapp="08129876543"
        )
        db_session.add(student)
        await db_session.flush()

        assert len(student.id) == 36
        assert student.created_at is not None
        assert student.updated_at is not None

    async def test_user_email_unique(self, db_session):
        db_session.add(User(email="a@kitapandu.com", name="A", password_hash="x", role="admin"))
        await db_session.flush()
        db_session.add(User(email="a@kitapandu.com", name="B", password_hash="y", role="admin"))
        with pytest.raises(IntegrityError):
            await db_session.flush()


def test_token_blacklist_repr():
    record = TokenBlacklist(jti="abc", expires_at=datetime(2025, 1, 1, tzinfo=UTC))
    assert "abc" in repr(record)
