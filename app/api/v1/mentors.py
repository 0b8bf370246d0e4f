"""Mentor API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import staff
from app.providers import MentorRepo
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import MentorDetail
from app.schemas.mentor import MentorCreate, MentorResponse, MentorUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(mentor_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Mentor with id '{mentor_id}' not found",
    )


@router.get("", response_model=Page[MentorDetail])
async def list_mentors(
    repo: MentorRepo,
    params: PageParams = Depends(pagination_params),
) -> Page[MentorDetail]:
    """List mentors with the classes they teach."""
    mentors, total = await repo.get_all(None, params)
    return Page[MentorDetail].create(
        [MentorDetail.model_validate(m) for m in mentors], total, params
    )


@router.get("/{mentor_id}", response_model=MentorDetail)
async def get_mentor(mentor_id: str, repo: MentorRepo) -> MentorDetail:
    mentor = await repo.get_detail(mentor_id)
    if mentor is None:
        raise _not_found(mentor_id)
    return MentorDetail.model_validate(mentor)


@router.post(
    "",
    response_model=MentorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff), Depends(audit_logged("create_mentor"))],
)
async def create_mentor(data: MentorCreate, repo: MentorRepo) -> MentorResponse:
    mentor = await repo.create(data.model_dump())
    return MentorResponse.model_validate(mentor)


@router.put(
    "/{mentor_id}",
    response_model=MentorResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_mentor"))],
)
async def update_mentor(mentor_id: str, data: MentorUpdate, repo: MentorRepo) -> MentorResponse:
    mentor = await repo.update(mentor_id, data)
    if mentor is None:
        raise _not_found(mentor_id)
    return MentorResponse.model_validate(mentor)


@router.delete(
    "/{mentor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_mentor"))],
)
async def delete_mentor(mentor_id: str, repo: MentorRepo) -> None:
    """Delete a mentor together with their classes."""
    if not await repo.delete(mentor_id):
        raise _not_found(mentor_id)
