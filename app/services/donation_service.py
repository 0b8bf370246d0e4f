"""Service layer for donation campaigns and their allocations.

Percentages are whole numbers rounded half up: a campaign's ``percent`` is
its collected amount over its target, and an allocation without an explicit
``percent`` gets its amount over the campaign target. The allocations of one
campaign may never add up to more than 100%.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from app.models.donation import Donation, DonationAllocation
from app.repositories.donation_repository import AllocationRepository, DonationRepository
from app.schemas.common import Page, PageParams
from app.schemas.donation import (
    AllocationCreate,
    AllocationResponse,
    AllocationUpdate,
    DonationCreate,
    DonationUpdate,
)

logger = logging.getLogger(__name__)

MAX_ALLOCATED_PERCENT = 100


class DonationNotFoundError(Exception):
    def __init__(self, donation_id: str):
        self.donation_id = donation_id
        super().__init__(f"Donation with id '{donation_id}' not found")


class AllocationLimitExceededError(Exception):
    """Raised when allocations would add up to more than 100% of a donation."""

    def __init__(self, total_percent: int):
        self.total_percent = total_percent
        super().__init__(
            f"Total allocation percent cannot exceed {MAX_ALLOCATED_PERCENT}% "
            f"(would be {total_percent}%)"
        )


def percent_of(amount: int, total: int) -> int:
    """``amount`` as a whole percentage of ``total``, rounded half up."""
    if total <= 0:
        return 0
    ratio = Decimal(amount) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class DonationService:
    """Business logic for ``/donations``."""

    def __init__(self, donations: DonationRepository, allocations: AllocationRepository):
        self._donations = donations
        self._allocations = allocations

    async def create_donation(self, data: DonationCreate) -> Donation:
        values = data.model_dump()
        values.update(collected_amount=0, percent=0)
        return await self._donations.create(values)

    async def update_donation(self, donation_id: str, data: DonationUpdate) -> Donation | None:
        """Update a campaign and recompute its progress."""
        donation = await self._donations.update(donation_id, data)
        if donation is None:
            return None
        percent = percent_of(donation.collected_amount, donation.target_amount)
        if percent != donation.percent:
            await self._donations.apply_changes(donation, {"percent": percent})
            donation = await self._donations.get_detail(donation_id)
        return donation

    async def _require_donation(self, donation_id: str) -> Donation:
        donation = await self._donations.get_by_id(donation_id)
        if donation is None:
            raise DonationNotFoundError(donation_id)
        return donation

    async def list_allocations(
        self, donation_id: str, params: PageParams
    ) -> Page[AllocationResponse]:
        """Page through one donation's allocations.

        Raises:
            DonationNotFoundError: Unknown donation.
        """
        await self._require_donation(donation_id)
        allocations, total = await self._allocations.get_all(
            None, params, DonationAllocation.donation_id == donation_id
        )
        return Page[AllocationResponse].create(
            [AllocationResponse.model_validate(a) for a in allocations], total, params
        )

    async def get_allocation(
        self, donation_id: str, allocation_id: str
    ) -> DonationAllocation | None:
        return await self._allocations.get_for_donation(donation_id, allocation_id)

    async def add_allocations(
        self, donation_id: str, items: list[AllocationCreate]
    ) -> list[DonationAllocation]:
        """Create several allocations at once.

        Raises:
            DonationNotFoundError: Unknown donation.
            AllocationLimitExceededError: Existing plus new percentages > 100.
        """
        donation = await self._require_donation(donation_id)
        rows = [
            {
                "donation_id": donation_id,
                "title": item.title,
                "amount": item.amount,
                "percent": (
                    item.percent
                    if item.percent is not None
                    else percent_of(item.amount, donation.target_amount)
                ),
            }
            for item in items
        ]
        total = await self._allocations.total_percent(donation_id) + sum(
            row["percent"] for row in rows
        )
        if total > MAX_ALLOCATED_PERCENT:
            raise AllocationLimitExceededError(total)

        created = await self._allocations.create_many(rows)
        logger.info("Added %d allocations to donation %s", len(created), donation_id)
        return created

    async def update_allocation(
        self, donation_id: str, allocation_id: str, data: AllocationUpdate
    ) -> DonationAllocation | None:
        """Update an allocation, deriving ``percent`` from a new ``amount``.

        Raises:
            DonationNotFoundError: Unknown donation.
            AllocationLimitExceededError: The update would push the total
                past 100%.
        """
        donation = await self._require_donation(donation_id)
        allocation = await self._allocations.get_for_donation(donation_id, allocation_id)
        if allocation is None:
            return None

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "percent" not in changes and "amount" in changes:
            changes["percent"] = percent_of(changes["amount"], donation.target_amount)

        if "percent" in changes:
            total = (
                await self._allocations.total_percent(donation_id, exclude_id=allocation_id)
                + changes["percent"]
            )
            if total > MAX_ALLOCATED_PERCENT:
                raise AllocationLimitExceededError(total)

        return await self._allocations.apply_changes(allocation, changes)

    async def delete_allocation(self, donation_id: str, allocation_id: str) -> bool:
        allocation = await self._allocations.get_for_donation(donation_id, allocation_id)
        if allocation is None:
            return False
        return await self._allocations.delete(allocation.id)
