"""Shared test fixtures for the kitapandu API."""

import os

# Set test configuration before any app imports trigger Settings() validation.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-for-unit-tests")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from typing import Any  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.auth.security import hash_password  # noqa: E402
from app.dependencies import create_session_factory  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base, Mentor, Program, ProgramClass, Schedule, Student, User  # noqa: E402
from app.rate_limit import limiter  # noqa: E402
from tests.helpers.token_factory import token_for  # noqa: E402

PASSWORD = "password123"

# bcrypt is slow on purpose; hash once per session
_PASSWORD_HASH = hash_password(PASSWORD)


# ---------------------------------------------------------------------------
# Database (in-memory SQLite shared by every session of a test)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for tests that drive repositories or the store directly."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP client fixture (FastAPI app on the test database)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client(engine, session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    ASGITransport does not run the lifespan, so the engine and session
    factory are put on ``app.state`` here.
    """
    app.state.engine = engine
    app.state.session_factory = session_factory
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Staff accounts and auth helpers
# ---------------------------------------------------------------------------


async def create_user(
    session_factory, email: str, role: str = "operator", *, is_active: bool = True
) -> User:
    async with session_factory() as session:
        user = User(
            email=email,
            name=email.split("@")[0].title(),
            role=role,
            password_hash=_PASSWORD_HASH,
            is_active=is_active,
        )
        session.add(user)
        await session.commit()
        return user


def auth_headers(user: Any) -> dict[str, str]:
    """Return Authorization header dict with a freshly issued JWT."""
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest_asyncio.fixture()
async def users(session_factory) -> SimpleNamespace:
    """An admin and an operator account, both with password ``password123``."""
    return SimpleNamespace(
        admin=await create_user(session_factory, "admin@kitapandu.com", "admin"),
        operator=await create_user(session_factory, "operator1@kitapandu.com", "operator"),
    )


@pytest_asyncio.fixture()
async def admin_client(client, users) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as admin user."""
    client.headers.update(auth_headers(users.admin))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def operator_client(client, users) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as operator user."""
    client.headers.update(auth_headers(users.operator))
    yield client
    client.headers.pop("Authorization", None)


# ---------------------------------------------------------------------------
# Program data
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def catalog(session_factory) -> SimpleNamespace:
    """A program, mentor and class with two weekly slots, plus one student."""
    async with session_factory() as session:
        program = Program(name="Tahfidz Anak", description="Hafalan Al-Qur'an", icon="quran")
        mentor = Mentor(name="Ustadz Ahmad", contact="08123456789")
        program_class = ProgramClass(
            program=program,
            mentor=mentor,
            name="Tahfidz A",
            min_age=7,
            max_age=10,
            status="active",
            started_at=datetime(2025, 2, 1, tzinfo=UTC),
            ended_at=datetime(2025, 4, 30, tzinfo=UTC),
        )
        program_class.schedules = [
            Schedule(day_of_week=3, start_time="16:00", end_time="17:00"),
            Schedule(day_of_week=1, start_time="16:00", end_time="17:00"),
        ]
        student = Student(
            student_name="Ali", student_age=8, parent_name="Bapak Ali", whatsapp="08129876543"
        )
        session.add_all([program, mentor, program_class, student])
        await session.commit()
        return SimpleNamespace(
            program=program, mentor=mentor, program_class=program_class, student=student
        )


def class_payload(program_id: str, mentor_id: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "program_id": program_id,
        "mentor_id": mentor_id,
        "name": "Calistung B",
        "min_age": 5,
        "max_age": 7,
        "started_at": "2025-03-01T00:00:00Z",
        "ended_at": "2025-05-31T00:00:00Z",
    }
    payload.update(overrides)
    return payload


def donation_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Donasi Renovasi Masjid",
        "description": "Penggalangan dana renovasi masjid",
        "status": "open",
        "target_amount": 10_000_000,
        "donor_count": 0,
        "google_form_url": "https://forms.gle/example",
        "start_date": "2025-01-01",
        "end_date": "2025-03-01",
    }
    payload.update(overrides)
    return payload
