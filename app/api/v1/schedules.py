"""Weekly schedule API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import staff
from app.filters.schedule import ScheduleFilter
from app.providers import ScheduleRepo
from app.repositories.base import DuplicateRecordError, RelatedRecordNotFoundError
from app.repositories.schedule_repository import InvalidScheduleError
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import ScheduleDetail
from app.schemas.schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(schedule_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Schedule with id '{schedule_id}' not found",
    )


@router.get("", response_model=Page[ScheduleDetail])
async def list_schedules(
    repo: ScheduleRepo,
    filters: ScheduleFilter = FilterDepends(ScheduleFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[ScheduleDetail]:
    """List weekly slots with their class and mentor."""
    schedules, total = await repo.get_all(filters, params)
    return Page[ScheduleDetail].create(
        [ScheduleDetail.model_validate(s) for s in schedules], total, params
    )


@router.get("/{schedule_id}", response_model=ScheduleDetail)
async def get_schedule(schedule_id: str, repo: ScheduleRepo) -> ScheduleDetail:
    schedule = await repo.get_detail(schedule_id)
    if schedule is None:
        raise _not_found(schedule_id)
    return ScheduleDetail.model_validate(schedule)


@router.post(
    "",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_schedule"))],
)
async def create_schedule(data: ScheduleCreate, repo: ScheduleRepo) -> ScheduleResponse:
    try:
        schedule = await repo.create(data.model_dump())
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DuplicateRecordError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return ScheduleResponse.model_validate(schedule)


@router.put(
    "/{schedule_id}",
    response_model=ScheduleResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_schedule"))],
)
async def update_schedule(
    schedule_id: str, data: ScheduleUpdate, repo: ScheduleRepo
) -> ScheduleResponse:
    try:
        schedule = await repo.update(schedule_id, data)
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DuplicateRecordError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    except InvalidScheduleError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if schedule is None:
        raise _not_found(schedule_id)
    return ScheduleResponse.model_validate(schedule)


@router.delete(
    "/{schedule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_schedule"))],
)
async def delete_schedule(schedule_id: str, repo: ScheduleRepo) -> None:
    if not await repo.delete(schedule_id):
        raise _not_found(schedule_id)
