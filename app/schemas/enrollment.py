"""Pydantic schemas for enrollments."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from app.models.enrollment import EnrollmentStatus
from app.schemas.common import UUIDStr


class EnrollmentCreate(BaseModel):
    student_id: UUIDStr
    class_id: UUIDStr
    status: EnrollmentStatus = EnrollmentStatus.REGISTERED
    register_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    confirmed_at: datetime | None = None


class EnrollmentUpdate(BaseModel):
    student_id: UUIDStr | None = None
    class_id: UUIDStr | None = None
    status: EnrollmentStatus | None = None
    register_at: datetime | None = None
    confirmed_at: datetime | None = None


class EnrollmentResponse(BaseModel):
    id: str
    student_id: str
    class_id: str
    status: EnrollmentStatus
    register_at: datetime
    confirmed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
