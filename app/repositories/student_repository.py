"""Repository for student data access."""

from sqlalchemy.orm import selectinload

from app.models.enrollment import Enrollment, EnrollmentStatus
from app.models.program_class import ProgramClass
from app.models.student import Student
from app.repositories.base import BaseRepository

# Active enrollments with everything needed to show a student's timetable
_ACTIVE_ENROLLMENTS = selectinload(
    Student.enrollments.and_(Enrollment.status == EnrollmentStatus.ACTIVE)
).selectinload(Enrollment.program_class)


class StudentRepository(BaseRepository[Student]):
    """Data access layer for students."""

    model = Student
    list_options = (selectinload(Student.enrollments),)
    detail_options = (
        _ACTIVE_ENROLLMENTS.selectinload(ProgramClass.program),
        _ACTIVE_ENROLLMENTS.selectinload(ProgramClass.mentor),
        _ACTIVE_ENROLLMENTS.selectinload(ProgramClass.schedules),
    )
