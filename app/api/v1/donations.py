"""Donation campaign and allocation API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import staff
from app.filters.donation import DonationFilter
from app.providers import DonationRepo, DonationSvc
from app.repositories.donation_repository import InvalidDonationError
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.donation import (
    AllocationCreate,
    AllocationResponse,
    AllocationUpdate,
    DonationCreate,
    DonationResponse,
    DonationUpdate,
)
from app.services.donation_service import AllocationLimitExceededError, DonationNotFoundError
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(donation_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Donation with id '{donation_id}' not found",
    )


def _allocation_not_found(allocation_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Allocation with id '{allocation_id}' not found for this donation",
    )


# ---------------------------------------------------------------------------
# Donations
# ---------------------------------------------------------------------------


@router.get("", response_model=Page[DonationResponse])
async def list_donations(
    repo: DonationRepo,
    filters: DonationFilter = FilterDepends(DonationFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[DonationResponse]:
    """List campaigns with their allocations, filterable by **status**."""
    donations, total = await repo.get_all(filters, params)
    return Page[DonationResponse].create(
        [DonationResponse.model_validate(d) for d in donations], total, params
    )


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(donation_id: str, repo: DonationRepo) -> DonationResponse:
    donation = await repo.get_detail(donation_id)
    if donation is None:
        raise _not_found(donation_id)
    return DonationResponse.model_validate(donation)


@router.post(
    "",
    response_model=DonationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_donation"))],
)
async def create_donation(data: DonationCreate, service: DonationSvc) -> DonationResponse:
    """Open a campaign. Collected amount and progress start at zero."""
    donation = await service.create_donation(data)
    return DonationResponse.model_validate(donation)


@router.put(
    "/{donation_id}",
    response_model=DonationResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_donation"))],
)
async def update_donation(
    donation_id: str, data: DonationUpdate, service: DonationSvc
) -> DonationResponse:
    """Update a campaign; ``percent`` follows the collected and target amounts."""
    try:
        donation = await service.update_donation(donation_id, data)
    except InvalidDonationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if donation is None:
        raise _not_found(donation_id)
    return DonationResponse.model_validate(donation)


@router.delete(
    "/{donation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_donation"))],
)
async def delete_donation(donation_id: str, repo: DonationRepo) -> None:
    if not await repo.delete(donation_id):
        raise _not_found(donation_id)


# ---------------------------------------------------------------------------
# Allocations
# ---------------------------------------------------------------------------


@router.get(
    "/{donation_id}/allocations",
    response_model=Page[AllocationResponse],
    dependencies=[Depends(staff)],
)
async def list_allocations(
    donation_id: str,
    service: DonationSvc,
    params: PageParams = Depends(pagination_params),
) -> Page[AllocationResponse]:
    try:
        return await service.list_allocations(donation_id, params)
    except DonationNotFoundError:
        raise _not_found(donation_id)


@router.get("/{donation_id}/allocations/{allocation_id}", response_model=AllocationResponse)
async def get_allocation(
    donation_id: str, allocation_id: str, service: DonationSvc
) -> AllocationResponse:
    allocation = await service.get_allocation(donation_id, allocation_id)
    if allocation is None:
        raise _allocation_not_found(allocation_id)
    return AllocationResponse.model_validate(allocation)


@router.post(
    "/{donation_id}/allocations",
    response_model=list[AllocationResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_allocations"))],
)
async def create_allocations(
    donation_id: str, items: list[AllocationCreate], service: DonationSvc
) -> list[AllocationResponse]:
    """Add one or more allocations. The donation's total may not pass 100%."""
    try:
        allocations = await service.add_allocations(donation_id, items)
    except DonationNotFoundError:
        raise _not_found(donation_id)
    except AllocationLimitExceededError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return [AllocationResponse.model_validate(a) for a in allocations]


@router.put(
    "/{donation_id}/allocations/{allocation_id}",
    response_model=AllocationResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_allocation"))],
)
async def update_allocation(
    donation_id: str, allocation_id: str, data: AllocationUpdate, service: DonationSvc
) -> AllocationResponse:
    try:
        allocation = await service.update_allocation(donation_id, allocation_id, data)
    except DonationNotFoundError:
        raise _not_found(donation_id)
    except AllocationLimitExceededError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if allocation is None:
        raise _allocation_not_found(allocation_id)
    return AllocationResponse.model_validate(allocation)


@router.delete(
    "/{donation_id}/allocations/{allocation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_allocation"))],
)
async def delete_allocation(donation_id: str, allocation_id: str, service: DonationSvc) -> None:
    if not await service.delete_allocation(donation_id, allocation_id):
        raise _allocation_not_found(allocation_id)
