"""Class model (a cohort of a program taught by one mentor)."""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.enrollment import Enrollment
    from app.models.mentor import Mentor
    from app.models.program import Program
    from app.models.schedule import Schedule


class ClassStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProgramClass(Base, UUIDMixin, TimestampMixin):
    """Class model. Named ``ProgramClass`` because ``class`` is reserved."""

    __tablename__ = "classes"

    program_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mentor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    min_age: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_age: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        SAEnum(
            ClassStatus,
            name="class_status",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ended_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    program: Mapped["Program"] = relationship(back_populates="classes")
    mentor: Mapped["Mentor"] = relationship(back_populates="classes")
    schedules: Mapped[list["Schedule"]] = relationship(
        back_populates="program_class",
        cascade="all, delete-orphan",
        order_by="[Schedule.day_of_week, Schedule.start_time]",
    )
    enrollments: Mapped[list["Enrollment"]] = relationship(
        back_populates="program_class", cascade="all, delete-orphan"
    )

    __table_args__ = (CheckConstraint("min_age <= max_age", name="ck_class_age_range"),)

    def __repr__(self) -> str:
        return f"<ProgramClass {self.id}: {self.name}>"
