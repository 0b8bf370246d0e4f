"""Class API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_filter import FilterDepends

from app.auth.dependencies import staff
from app.filters.program_class import ClassFilter
from app.providers import ClassRepo
from app.repositories.base import RelatedRecordNotFoundError
from app.repositories.class_repository import InvalidClassError
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import ClassDetail, ClassListItem
from app.schemas.program_class import ClassCreate, ClassResponse, ClassUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(class_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Class with id '{class_id}' not found",
    )


@router.get("", response_model=Page[ClassListItem])
async def list_classes(
    repo: ClassRepo,
    filters: ClassFilter = FilterDepends(ClassFilter),
    params: PageParams = Depends(pagination_params),
) -> Page[ClassListItem]:
    """
    List classes with their program and mentor.

    - **status**: ``active`` or ``inactive``
    - **program_id** / **mentor_id**: classes of one program or mentor
    """
    classes, total = await repo.get_all(filters, params)
    return Page[ClassListItem].create(
        [ClassListItem.model_validate(c) for c in classes], total, params
    )


@router.get("/{class_id}", response_model=ClassDetail)
async def get_class(class_id: str, repo: ClassRepo) -> ClassDetail:
    program_class = await repo.get_detail(class_id)
    if program_class is None:
        raise _not_found(class_id)
    return ClassDetail.model_validate(program_class)


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_class"))],
)
async def create_class(data: ClassCreate, repo: ClassRepo) -> ClassResponse:
    try:
        program_class = await repo.create(data.model_dump())
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return ClassResponse.model_validate(program_class)


@router.put(
    "/{class_id}",
    response_model=ClassResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_class"))],
)
async def update_class(class_id: str, data: ClassUpdate, repo: ClassRepo) -> ClassResponse:
    try:
        program_class = await repo.update(class_id, data)
    except RelatedRecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except InvalidClassError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if program_class is None:
        raise _not_found(class_id)
    return ClassResponse.model_validate(program_class)


@router.delete(
    "/{class_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_class"))],
)
async def delete_class(class_id: str, repo: ClassRepo) -> None:
    """Delete a class with its schedules and enrollments."""
    if not await repo.delete(class_id):
        raise _not_found(class_id)
