"""Mentor model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.program_class import ProgramClass


class Mentor(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "mentors"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact: Mapped[str] = mapped_column(String(255), nullable=False)

    classes: Mapped[list["ProgramClass"]] = relationship(
        back_populates="mentor", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Mentor {self.id}: {self.name}>"
