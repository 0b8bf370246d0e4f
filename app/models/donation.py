"""Donation campaign and allocation models."""

from datetime import date
from enum import StrEnum

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin


class DonationStatus(StrEnum):
    OPEN = "open"
    FINISHED = "finished"
    UPCOMING = "upcoming"


class Donation(Base, UUIDMixin, TimestampMixin):
    """Fundraising campaign. ``percent`` tracks collected vs. target."""

    __tablename__ = "donations"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        SAEnum(
            DonationStatus,
            name="donation_status",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    target_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    collected_amount: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    percent: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    donor_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    google_form_url: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    allocations: Mapped[list["DonationAllocation"]] = relationship(
        back_populates="donation",
        cascade="all, delete-orphan",
        order_by="DonationAllocation.created_at",
    )

    __table_args__ = (CheckConstraint("target_amount > 0", name="ck_donation_target_positive"),)

    def __repr__(self) -> str:
        return f"<Donation {self.id}: {self.title} ({self.percent}%)>"


class DonationAllocation(Base, UUIDMixin, TimestampMixin):
    """How part of a donation is spent."""

    __tablename__ = "donation_allocations"

    donation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("donations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    percent: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    donation: Mapped[Donation] = relationship(back_populates="allocations")

    __table_args__ = (
        CheckConstraint("percent >= 0 AND percent <= 100", name="ck_allocation_percent_range"),
    )

    def __repr__(self) -> str:
        return f"<DonationAllocation {self.id}: {self.title} {self.percent}%>"
