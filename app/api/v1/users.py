"""Staff account management endpoints (admin only)."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import admin_only
from app.filters.user import UserFilter
from app.providers import UserSvc
from app.repositories.base import DuplicateRecordError
from app.schemas.auth import OwnerRevocationResponse, UserResponse, UserUpdate
from app.schemas.common import Page, PageParams, pagination_params
from app.utils.audit import audit_logged

router = APIRouter(dependencies=[Depends(admin_only)])


def _not_found(user_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User with id '{user_id}' not found",
    )


@router.get("", response_model=Page[UserResponse])
async def list_users(
    service: UserSvc,
    filters: UserFilter = FilterDepends(UserFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[UserResponse]:
    """
    List staff accounts.

    - **role**: ``admin`` or ``operator``
    - **is_active**: only active or only deactivated accounts
    - **email__ilike**: case-insensitive email substring
    """
    return await service.list_users(filters, params)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, service: UserSvc) -> UserResponse:
    user = await service.get_user(user_id)
    if user is None:
        raise _not_found(user_id)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(audit_logged("update_user"))],
)
async def update_user(user_id: str, data: UserUpdate, service: UserSvc) -> UserResponse:
    """Update an account. Password, role or deactivation changes sign the user out."""
    try:
        user = await service.update_user(user_id, data)
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Email '{data.email}' is already registered",
        )
    if user is None:
        raise _not_found(user_id)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(audit_logged("delete_user"))],
)
async def delete_user(user_id: str, service: UserSvc) -> None:
    if not await service.delete_user(user_id):
        raise _not_found(user_id)


@router.post(
    "/{user_id}/revoke-tokens",
    response_model=OwnerRevocationResponse,
    dependencies=[Depends(audit_logged("revoke_user_tokens"))],
)
async def revoke_user_tokens(user_id: str, service: UserSvc) -> OwnerRevocationResponse:
    """Reject every token this user holds right now."""
    result = await service.revoke_tokens(user_id)
    if result is None:
        raise _not_found(user_id)
    return result
