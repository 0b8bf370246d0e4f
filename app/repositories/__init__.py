"""Database repositories for data access."""
from app.repositories.announcement_repository import AnnouncementRepository
from app.repositories.base import (
    BaseRepository,
    DuplicateRecordError,
    RelatedRecordNotFoundError,
)
from app.repositories.class_repository import ClassRepository
from app.repositories.donation_repository import AllocationRepository, DonationRepository
from app.repositories.enrollment_repository import EnrollmentRepository
from app.repositories.mentor_repository import MentorRepository
from app.repositories.program_repository import ProgramRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.student_repository import StudentRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "AllocationRepository",
    "AnnouncementRepository",
    "BaseRepository",
    "ClassRepository",
    "DonationRepository",
    "DuplicateRecordError",
    "EnrollmentRepository",
    "MentorRepository",
    "ProgramRepository",
    "RelatedRecordNotFoundError",
    "ScheduleRepository",
    "StudentRepository",
    "UserRepository",
]
