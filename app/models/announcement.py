"""Announcement model."""

from enum import StrEnum

from sqlalchemy import String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class AnnouncementCategory(StrEnum):
    """Announcement categories (schedule change, holiday, event, general)."""

    JADWAL = "jadwal"
    LIBUR = "libur"
    EVENT = "event"
    UMUM = "umum"


class Announcement(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "announcements"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(
        SAEnum(
            AnnouncementCategory,
            name="announcement_category",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Announcement {self.id}: {self.title}>"
