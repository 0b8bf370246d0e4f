"""Weekly class schedule model."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.program_class import ProgramClass


class Schedule(Base, UUIDMixin, TimestampMixin):
    """A recurring weekly slot for a class (1=Monday .. 7=Sunday, HH:MM times)."""

    __tablename__ = "schedules"

    class_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    program_class: Mapped["ProgramClass"] = relationship(back_populates="schedules")

    __table_args__ = (
        UniqueConstraint(
            "class_id", "day_of_week", "start_time", name="uq_schedule_class_day_start"
        ),
        CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_schedule_day_of_week"),
    )

    def __repr__(self) -> str:
        slot = f"{self.start_time}-{self.end_time}"
        return f"<Schedule {self.class_id} day={self.day_of_week} {slot}>"
