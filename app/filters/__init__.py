"""Declarative query filters (fastapi-filter)."""

from .announcement import AnnouncementFilter
from .donation import DonationFilter
from .enrollment import EnrollmentFilter
from .program_class import ClassFilter
from .schedule import ScheduleFilter
from .user import UserFilter

__all__ = [
    "AnnouncementFilter",
    "ClassFilter",
    "DonationFilter",
    "EnrollmentFilter",
    "ScheduleFilter",
    "UserFilter",
]
