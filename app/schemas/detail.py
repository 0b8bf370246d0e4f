"""Response schemas that embed related records.

Kept apart from the per-entity modules because relations point both ways
(a program lists its classes, a class names its program). Every relation
named here must be eager-loaded by the repository that feeds it.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.enrollment import EnrollmentResponse
from app.schemas.mentor import MentorResponse
from app.schemas.program import ProgramResponse
from app.schemas.program_class import ClassResponse
from app.schemas.schedule import ScheduleResponse
from app.schemas.student import StudentResponse


def _class_field() -> Any:
    """Read from the ORM attribute ``program_class``, written (and read back) as ``class``."""
    return Field(
        validation_alias=AliasChoices("program_class", "class"),
        serialization_alias="class",
    )


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------


class ClassWithMentor(ClassResponse):
    mentor: MentorResponse


class ClassWithSchedules(ClassResponse):
    schedules: list[ScheduleResponse] = []


class ClassListItem(ClassResponse):
    program: ProgramResponse
    mentor: MentorResponse


class ClassDetail(ClassListItem):
    schedules: list[ScheduleResponse] = []


# ---------------------------------------------------------------------------
# Owners of classes
# ---------------------------------------------------------------------------


class MentorDetail(MentorResponse):
    classes: list[ClassResponse] = []


class ProgramDetail(ProgramResponse):
    classes: list[ClassWithSchedules] = []


# ---------------------------------------------------------------------------
# Students and enrollments
# ---------------------------------------------------------------------------


class StudentListItem(StudentResponse):
    enrollments: list[EnrollmentResponse] = []


class StudentEnrollment(EnrollmentResponse):
    program_class: ClassDetail = _class_field()


class StudentDetail(StudentResponse):
    """A student with their active enrollments only."""

    enrollments: list[StudentEnrollment] = []


class EnrollmentDetail(EnrollmentResponse):
    student: StudentResponse
    program_class: ClassResponse = _class_field()


# ---------------------------------------------------------------------------
# Schedules
# ---------------------------------------------------------------------------


class ScheduleDetail(ScheduleResponse):
    program_class: ClassWithMentor = _class_field()


class StudentSchedule(BaseModel):
    """A student's weekly timetable: every class they are actively enrolled in."""

    student: StudentResponse
    classes: list[ClassDetail]
