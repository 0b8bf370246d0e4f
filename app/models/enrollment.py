"""Enrollment model linking a student to a class."""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.program_class import ProgramClass
    from app.models.student import Student


class EnrollmentStatus(StrEnum):
    REGISTERED = "registered"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    DROPPED = "dropped"
    REJECTED = "rejected"
    COMPLETED = "completed"


class Enrollment(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "enrollments"

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    class_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        SAEnum(
            EnrollmentStatus,
            name="enrollment_status",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    register_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    student: Mapped["Student"] = relationship(back_populates="enrollments")
    program_class: Mapped["ProgramClass"] = relationship(back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),
    )

    def __repr__(self) -> str:
        return f"<Enrollment {self.id}: {self.student_id} -> {self.class_id} ({self.status})>"
