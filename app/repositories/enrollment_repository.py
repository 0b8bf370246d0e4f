"""Repository for enrollment data access."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import selectinload

from app.models.enrollment import Enrollment
from app.models.program_class import ProgramClass
from app.models.student import Student
from app.repositories.base import BaseRepository


class EnrollmentRepository(BaseRepository[Enrollment]):
    """Data access layer for enrollments (one per student and class)."""

    model = Enrollment
    duplicate_message = "Student is already enrolled in this class"
    list_options = (selectinload(Enrollment.student), selectinload(Enrollment.program_class))
    detail_options = list_options

    async def create(self, values: dict[str, Any]) -> Enrollment:
        """Enroll a student.

        Raises:
            RelatedRecordNotFoundError: If the student or class does not exist.
            DuplicateRecordError: If the student is already in the class.
        """
        await self.ensure_exists(Student, values["student_id"])
        await self.ensure_exists(ProgramClass, values["class_id"])
        return await super().create(values)

    async def update(self, record_id: str, data: BaseModel) -> Enrollment | None:
        changes = self._changes(data)
        if "student_id" in changes:
            await self.ensure_exists(Student, changes["student_id"])
        if "class_id" in changes:
            await self.ensure_exists(ProgramClass, changes["class_id"])
        return await super().update(record_id, data)
