"""Enrollment API endpoints.

Anyone may enroll a student; changing or removing an enrollment is for staff.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import staff
from app.filters.enrollment import EnrollmentFilter
from app.providers import EnrollmentRepo
from app.repositories.base import DuplicateRecordError, RelatedRecordNotFoundError
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import EnrollmentDetail
from app.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(enrollment_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Enrollment with id '{enrollment_id}' not found",
    )


@router.get("", response_model=Page[EnrollmentDetail])
async def list_enrollments(
    repo: EnrollmentRepo,
    filters: EnrollmentFilter = FilterDepends(EnrollmentFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[EnrollmentDetail]:
    """List enrollments with student and class, filterable by status, student or class."""
    enrollments, total = await repo.get_all(filters, params)
    return Page[EnrollmentDetail].create(
        [EnrollmentDetail.model_validate(e) for e in enrollments], total, params
    )


@router.get("/{enrollment_id}", response_model=EnrollmentDetail)
async def get_enrollment(enrollment_id: str, repo: EnrollmentRepo) -> EnrollmentDetail:
    enrollment = await repo.get_detail(enrollment_id)
    if enrollment is None:
        raise _not_found(enrollment_id)
    return EnrollmentDetail.model_validate(enrollment)


@router.post("", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
async def create_enrollment(data: EnrollmentCreate, repo: EnrollmentRepo) -> EnrollmentResponse:
    """Enroll a student in a class. A student can be enrolled in a class once."""
    try:
        enrollment = await repo.create(data.model_dump())
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DuplicateRecordError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return EnrollmentResponse.model_validate(enrollment)


@router.put(
    "/{enrollment_id}",
    response_model=EnrollmentResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_enrollment"))],
)
async def update_enrollment(
    enrollment_id: str, data: EnrollmentUpdate, repo: EnrollmentRepo
) -> EnrollmentResponse:
    try:
        enrollment = await repo.update(enrollment_id, data)
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except DuplicateRecordError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    if enrollment is None:
        raise _not_found(enrollment_id)
    return EnrollmentResponse.model_validate(enrollment)


@router.delete(
    "/{enrollment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_enrollment"))],
)
async def delete_enrollment(enrollment_id: str, repo: EnrollmentRepo) -> None:
    if not await repo.delete(enrollment_id):
        raise _not_found(enrollment_id)
