"""Announcement API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import staff
from app.filters.announcement import AnnouncementFilter
from app.providers import AnnouncementRepo
from app.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
)
from app.schemas.common import Page, PageParams, pagination_params
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(announcement_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Announcement with id '{announcement_id}' not found",
    )


@router.get("", response_model=Page[AnnouncementResponse])
async def list_announcements(
    repo: AnnouncementRepo,
    filters: AnnouncementFilter = FilterDepends(AnnouncementFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[AnnouncementResponse]:
    """
    List announcements, newest first.

    - **category**: ``jadwal``, ``libur``, ``event`` or ``umum``
    - **title__ilike**: case-insensitive title substring
    """
    announcements, total = await repo.get_all(filters, params)
    return Page[AnnouncementResponse].create(
        [AnnouncementResponse.model_validate(a) for a in announcements], total, params
    )


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(announcement_id: str, repo: AnnouncementRepo) -> AnnouncementResponse:
    announcement = await repo.get_by_id(announcement_id)
    if announcement is None:
        raise _not_found(announcement_id)
    return AnnouncementResponse.model_validate(announcement)


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_announcement"))],
)
async def create_announcement(
    data: AnnouncementCreate, repo: AnnouncementRepo
) -> AnnouncementResponse:
    announcement = await repo.create(data.model_dump())
    return AnnouncementResponse.model_validate(announcement)


@router.put(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_announcement"))],
)
async def update_announcement(
    announcement_id: str, data: AnnouncementUpdate, repo: AnnouncementRepo
) -> AnnouncementResponse:
    announcement = await repo.update(announcement_id, data)
    if announcement is None:
        raise _not_found(announcement_id)
    return AnnouncementResponse.model_validate(announcement)


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_announcement"))],
)
async def delete_announcement(announcement_id: str, repo: AnnouncementRepo) -> None:
    if not await repo.delete(announcement_id):
        raise _not_found(announcement_id)
