"""Program API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import staff
from app.providers import ProgramRepo
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import ClassDetail, ProgramDetail
from app.schemas.program import ProgramCreate, ProgramResponse, ProgramUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(program_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Program with id '{program_id}' not found",
    )


@router.get("", response_model=Page[ProgramDetail])
async def list_programs(
    repo: ProgramRepo,
    params: PageParams = Depends(pagination_params),
) -> Page[ProgramDetail]:
    """List programs with their classes and weekly schedules."""
    programs, total = await repo.get_all(None, params)
    return Page[ProgramDetail].create(
        [ProgramDetail.model_validate(p) for p in programs], total, params
    )


@router.get("/{program_id}", response_model=ProgramDetail)
async def get_program(program_id: str, repo: ProgramRepo) -> ProgramDetail:
    program = await repo.get_detail(program_id)
    if program is None:
        raise _not_found(program_id)
    return ProgramDetail.model_validate(program)


@router.get("/{program_id}/classes", response_model=list[ClassDetail])
async def list_program_classes(program_id: str, repo: ProgramRepo) -> list[ClassDetail]:
    """Classes of one program with mentor and schedules ordered by day and start time."""
    if await repo.get_by_id(program_id) is None:
        raise _not_found(program_id)
    classes = await repo.get_classes(program_id)
    return [ClassDetail.model_validate(c) for c in classes]


@router.post(
    "",
    response_model=ProgramResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_program"))],
)
async def create_program(data: ProgramCreate, repo: ProgramRepo) -> ProgramResponse:
    program = await repo.create(data.model_dump())
    return ProgramResponse.model_validate(program)


@router.put(
    "/{program_id}",
    response_model=ProgramResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_program"))],
)
async def update_program(
    program_id: str, data: ProgramUpdate, repo: ProgramRepo
) -> ProgramResponse:
    program = await repo.update(program_id, data)
    if program is None:
        raise _not_found(program_id)
    return ProgramResponse.model_validate(program)


@router.delete(
    "/{program_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_program"))],
)
async def delete_program(program_id: str, repo: ProgramRepo) -> None:
    """Delete a program together with its classes."""
    if not await repo.delete(program_id):
        raise _not_found(program_id)
