"""Student API endpoints.

Registration and a student's own pages are public; the roster and any
change to a student are staff-only.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import staff
from app.providers import StudentRepo
from app.schemas.common import Page, PageParams, pagination_params
from app.schemas.detail import ClassDetail, StudentDetail, StudentListItem, StudentSchedule
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from app.utils.audit import audit_logged

router = APIRouter()


def _not_found(student_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Student with id '{student_id}' not found",
    )


@router.get(
    "",
    response_model=Page[StudentListItem],
    dependencies=[Depends(staff)],
)
async def list_students(
    repo: StudentRepo,
    params: PageParams = Depends(pagination_params),
) -> Page[StudentListItem]:
    """List students with their enrollments, newest first."""
    students, total = await repo.get_all(None, params)
    return Page[StudentListItem].create(
        [StudentListItem.model_validate(s) for s in students], total, params
    )


@router.get("/{student_id}", response_model=StudentDetail)
async def get_student(student_id: str, repo: StudentRepo) -> StudentDetail:
    """Get a student with active enrollments, their classes, mentors and schedules."""
    student = await repo.get_detail(student_id)
    if student is None:
        raise _not_found(student_id)
    return StudentDetail.model_validate(student)


@router.get("/{student_id}/schedule", response_model=StudentSchedule)
async def get_student_schedule(student_id: str, repo: StudentRepo) -> StudentSchedule:
    """Weekly timetable: each active class with program, mentor and ordered slots."""
    student = await repo.get_detail(student_id)
    if student is None:
        raise _not_found(student_id)
    return StudentSchedule(
        student=StudentResponse.model_validate(student),
        classes=[ClassDetail.model_validate(e.program_class) for e in student.enrollments],
    )


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(data: StudentCreate, repo: StudentRepo) -> StudentResponse:
    """Register a student."""
    student = await repo.create(data.model_dump())
    return StudentResponse.model_validate(student)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    dependencies=[Depends(staff), Depends(audit_logged("update_student"))],
)
async def update_student(
    student_id: str, data: StudentUpdate, repo: StudentRepo
) -> StudentResponse:
    student = await repo.update(student_id, data)
    if student is None:
        raise _not_found(student_id)
    return StudentResponse.model_validate(student)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff), Depends(audit_logged("delete_student"))],
)
async def delete_student(student_id: str, repo: StudentRepo) -> None:
    """Delete a student and their enrollments."""
    if not await repo.delete(student_id):
        raise _not_found(student_id)
