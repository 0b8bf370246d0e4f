"""Student model."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.enrollment import Enrollment


class Student(Base, UUIDMixin, TimestampMixin):
    """A child registered by a parent or guardian."""

    __tablename__ = "students"

    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    student_age: Mapped[int] = mapped_column(Integer, nullable=False)
    parent_name: Mapped[str] = mapped_column(String(255), nullable=False)
    whatsapp: Mapped[str] = mapped_column(String(15), nullable=False)

    enrollments: Mapped[list["Enrollment"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Student {self.id}: {self.student_name}>"
