"""Database models package."""

from app.models.announcement import Announcement, AnnouncementCategory
from app.models.base import Base
from app.models.donation import Donation, DonationAllocation, DonationStatus
from app.models.enrollment import Enrollment, EnrollmentStatus
from app.models.mentor import Mentor
from app.models.program import Program
from app.models.program_class import ClassStatus, ProgramClass
from app.models.schedule import Schedule
from app.models.student import Student
from app.models.token_blacklist import TokenBlacklist
from app.models.user import User, UserRole

__all__ = [
    # Base
    "Base",
    # Models
    "Announcement",
    "Donation",
    "DonationAllocation",
    "Enrollment",
    "Mentor",
    "Program",
    "ProgramClass",
    "Schedule",
    "Student",
    "TokenBlacklist",
    "User",
    # Enums
    "AnnouncementCategory",
    "ClassStatus",
    "DonationStatus",
    "EnrollmentStatus",
    "UserRole",
]
