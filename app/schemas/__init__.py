"""Pydantic schemas package."""
from app.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from app.schemas.auth import (
    LoginRequest,
    SignupRequest,
    TokenClaims,
    TokenResponse,
    UserResponse,
    UserUpdate,
)
from app.schemas.common import Page, PageParams
from app.schemas.donation import (
    AllocationCreate,
    AllocationResponse,
    AllocationUpdate,
    DonationCreate,
    DonationResponse,
    DonationUpdate,
)
from app.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate
from app.schemas.mentor import MentorCreate, MentorResponse, MentorUpdate
from app.schemas.program import ProgramCreate, ProgramResponse, ProgramUpdate
from app.schemas.program_class import ClassCreate, ClassResponse, ClassUpdate
from app.schemas.schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate

__all__ = [
    # Pagination
    "Page",
    "PageParams",
    # Auth schemas
    "LoginRequest",
    "SignupRequest",
    "TokenClaims",
    "TokenResponse",
    "UserResponse",
    "UserUpdate",
    # Resource schemas
    "AnnouncementCreate",
    "AnnouncementResponse",
    "AnnouncementUpdate",
    "AllocationCreate",
    "AllocationResponse",
    "AllocationUpdate",
    "ClassCreate",
    "ClassResponse",
    "ClassUpdate",
    "DonationCreate",
    "DonationResponse",
    "DonationUpdate",
    "EnrollmentCreate",
    "EnrollmentResponse",
    "EnrollmentUpdate",
    "MentorCreate",
    "MentorResponse",
    "MentorUpdate",
    "ProgramCreate",
    "ProgramResponse",
    "ProgramUpdate",
    "ScheduleCreate",
    "ScheduleResponse",
    "ScheduleUpdate",
    "StudentCreate",
    "StudentResponse",
    "StudentUpdate",
]
