"""Repositories for donation campaigns and their allocations."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.models.donation import Donation, DonationAllocation
from app.repositories.base import BaseRepository


class InvalidDonationError(ValueError):
    """Raised when a partial update leaves a campaign ending before it starts."""


class DonationRepository(BaseRepository[Donation]):
    """Data access layer for donations. Reads always carry the allocations."""

    model = Donation
    list_options = (selectinload(Donation.allocations),)
    detail_options = list_options

    async def create(self, values: dict[str, Any]) -> Donation:
        record = await super().create(values)
        return await self.get_detail(record.id)  # type: ignore[return-value]

    async def update(self, record_id: str, data: BaseModel) -> Donation | None:
        """Update a campaign, checking the merged date range.

        Raises:
            InvalidDonationError: If the stored and new dates are out of order.
        """
        record = await self.get_by_id(record_id)
        if record is None:
            return None

        changes = self._changes(data)
        start_date = changes.get("start_date", record.start_date)
        end_date = changes.get("end_date", record.end_date)
        if start_date > end_date:
            raise InvalidDonationError("start_date must be on or before end_date")

        await self.apply_changes(record, changes)
        return await self.get_detail(record_id)


class AllocationRepository(BaseRepository[DonationAllocation]):
    """Data access layer for allocations, always scoped to one donation."""

    model = DonationAllocation

    async def get_for_donation(
        self, donation_id: str, allocation_id: str
    ) -> DonationAllocation | None:
        query = select(DonationAllocation).where(
            DonationAllocation.id == allocation_id,
            DonationAllocation.donation_id == donation_id,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def total_percent(self, donation_id: str, exclude_id: str | None = None) -> int:
        """Sum of allocated percent for a donation, optionally leaving one out."""
        query = select(func.coalesce(func.sum(DonationAllocation.percent), 0)).where(
            DonationAllocation.donation_id == donation_id
        )
        if exclude_id is not None:
            query = query.where(DonationAllocation.id != exclude_id)
        return int(await self.session.scalar(query) or 0)

    async def create_many(self, rows: list[dict[str, Any]]) -> list[DonationAllocation]:
        records = [DonationAllocation(**row) for row in rows]
        self.session.add_all(records)
        await self._flush()
        for record in records:
            await self.session.refresh(record)
        return records
