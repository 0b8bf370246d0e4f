"""Seed demo accounts and program data into the database.

Usage::

    python scripts/seed.py [path/to/seed_data.yaml]

Accounts are matched by email and skipped when present. Program data is only
loaded into an empty database.
"""

import asyncio
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.auth.security import hash_password
from app.config import get_settings
from app.dependencies import InfrastructureContainer
from app.models import (
    Announcement,
    Donation,
    DonationAllocation,
    Enrollment,
    Mentor,
    Program,
    ProgramClass,
    Schedule,
    Student,
    User,
)
from app.services.donation_service import percent_of
from app.utils.logging import get_logger, setup_logging

logger = get_logger("scripts.seed")

DEFAULT_SEED_FILE = Path(__file__).parent.parent / "seeds" / "seed_data.yaml"


async def seed_users(session: AsyncSession, data: dict[str, Any]) -> int:
    """Insert staff accounts that do not exist yet."""
    password_hash = hash_password(data["default_password"])
    inserted = 0
    for user in data.get("users", []):
        email = user["email"].lower()
        existing = await session.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            logger.info("user_skipped", email=email)
            continue
        session.add(
            User(email=email, name=user["name"], role=user["role"], password_hash=password_hash)
        )
        inserted += 1
    return inserted


async def seed_programs(session: AsyncSession, data: dict[str, Any]) -> None:
    """Insert announcements, programs, classes, students and donations."""
    count = await session.scalar(select(func.count()).select_from(Program))
    if count:
        logger.info("program_data_skipped", programs=count)
        return

    for item in data.get("announcements", []):
        session.add(Announcement(**item))

    programs = {
        item.pop("key"): Program(**item) for item in data.get("programs", [])
    }
    mentors = {item.pop("key"): Mentor(**item) for item in data.get("mentors", [])}
    session.add_all([*programs.values(), *mentors.values()])

    classes: dict[str, ProgramClass] = {}
    for item in data.get("classes", []):
        key = item.pop("key")
        schedules = item.pop("schedules", [])
        program_class = ProgramClass(
            program=programs[item.pop("program")],
            mentor=mentors[item.pop("mentor")],
            **item,
        )
        program_class.schedules = [Schedule(**slot) for slot in schedules]
        classes[key] = program_class
    session.add_all(classes.values())

    now = datetime.now(UTC)
    for item in data.get("students", []):
        enrollments = item.pop("enrollments", [])
        student = Student(**item)
        student.enrollments = [
            Enrollment(
                program_class=classes[row["class"]],
                status=row["status"],
                register_at=now,
                confirmed_at=now if row.get("confirmed") else None,
            )
            for row in enrollments
        ]
        session.add(student)

    for item in data.get("donations", []):
        allocations = item.pop("allocations", [])
        donation = Donation(
            percent=percent_of(item["collected_amount"], item["target_amount"]),
            **item,
        )
        donation.allocations = [
            DonationAllocation(
                title=row["title"],
                amount=row["amount"],
                percent=row.get("percent", percent_of(row["amount"], item["target_amount"])),
            )
            for row in allocations
        ]
        session.add(donation)

    await session.flush()
    logger.info(
        "program_data_seeded",
        programs=len(programs),
        mentors=len(mentors),
        classes=len(classes),
    )


async def main(seed_file: Path) -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "console")

    if not seed_file.exists():
        logger.error("seed_file_missing", path=str(seed_file))
        raise SystemExit(1)

    with open(seed_file) as f:
        data = yaml.safe_load(f)

    infra = InfrastructureContainer.from_settings(settings)
    try:
        await infra.verify()
        async with infra.session_factory() as session:
            inserted = await seed_users(session, data)
            await seed_programs(session, data)
            await session.commit()
        logger.info("seed_complete", users_inserted=inserted)
    finally:
        await infra.close()


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED_FILE
    asyncio.run(main(path))
