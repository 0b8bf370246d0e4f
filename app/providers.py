"""FastAPI dependency providers for repositories and services.

Kept apart from ``dependencies.py`` so that module stays free of imports
from the repository and service layers. Route modules should import type
aliases from here.
"""

from typing import Annotated

from fastapi import Depends

from app.dependencies import DBSession, RevocationStoreDep
from app.repositories.announcement_repository import AnnouncementRepository
from app.repositories.class_repository import ClassRepository
from app.repositories.donation_repository import AllocationRepository, DonationRepository
from app.repositories.enrollment_repository import EnrollmentRepository
from app.repositories.mentor_repository import MentorRepository
from app.repositories.program_repository import ProgramRepository
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.student_repository import StudentRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import AuthService
from app.services.donation_service import DonationService
from app.services.user_service import UserService

# ---------------------------------------------------------------------------
# Repository providers
# ---------------------------------------------------------------------------


def get_user_repository(db: DBSession) -> UserRepository:
    return UserRepository(db)


def get_student_repository(db: DBSession) -> StudentRepository:
    return StudentRepository(db)


def get_mentor_repository(db: DBSession) -> MentorRepository:
    return MentorRepository(db)


def get_program_repository(db: DBSession) -> ProgramRepository:
    return ProgramRepository(db)


def get_class_repository(db: DBSession) -> ClassRepository:
    return ClassRepository(db)


def get_enrollment_repository(db: DBSession) -> EnrollmentRepository:
    return EnrollmentRepository(db)


def get_schedule_repository(db: DBSession) -> ScheduleRepository:
    return ScheduleRepository(db)


def get_announcement_repository(db: DBSession) -> AnnouncementRepository:
    return AnnouncementRepository(db)


def get_donation_repository(db: DBSession) -> DonationRepository:
    return DonationRepository(db)


def get_allocation_repository(db: DBSession) -> AllocationRepository:
    return AllocationRepository(db)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
StudentRepo = Annotated[StudentRepository, Depends(get_student_repository)]
MentorRepo = Annotated[MentorRepository, Depends(get_mentor_repository)]
ProgramRepo = Annotated[ProgramRepository, Depends(get_program_repository)]
ClassRepo = Annotated[ClassRepository, Depends(get_class_repository)]
EnrollmentRepo = Annotated[EnrollmentRepository, Depends(get_enrollment_repository)]
ScheduleRepo = Annotated[ScheduleRepository, Depends(get_schedule_repository)]
AnnouncementRepo = Annotated[AnnouncementRepository, Depends(get_announcement_repository)]
DonationRepo = Annotated[DonationRepository, Depends(get_donation_repository)]
AllocationRepo = Annotated[AllocationRepository, Depends(get_allocation_repository)]

# ---------------------------------------------------------------------------
# Service providers
# ---------------------------------------------------------------------------


def get_auth_service(repo: UserRepo, store: RevocationStoreDep) -> AuthService:
    return AuthService(repo, store)


def get_user_service(repo: UserRepo, store: RevocationStoreDep) -> UserService:
    return UserService(repo, store)


def get_donation_service(donations: DonationRepo, allocations: AllocationRepo) -> DonationService:
    return DonationService(donations, allocations)


AuthSvc = Annotated[AuthService, Depends(get_auth_service)]
UserSvc = Annotated[UserService, Depends(get_user_service)]
DonationSvc = Annotated[DonationService, Depends(get_donation_service)]
