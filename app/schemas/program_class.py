"""Pydantic schemas for classes."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from app.models.program_class import ClassStatus
from app.schemas.common import UUIDStr


def _check_class_bounds(
    min_age: int | None,
    max_age: int | None,
    started_at: datetime | None,
    ended_at: datetime | None,
) -> None:
    """Validate the age range and run dates when both ends are known."""
    if min_age is not None and max_age is not None and min_age > max_age:
        raise ValueError("min_age must be less than or equal to max_age")
    if started_at is not None and ended_at is not None and started_at >= ended_at:
        raise ValueError("started_at must be before ended_at")


class ClassCreate(BaseModel):
    program_id: UUIDStr
    mentor_id: UUIDStr
    name: str = Field(..., min_length=1, max_length=255)
    min_age: int = Field(..., ge=0)
    max_age: int = Field(..., ge=0)
    status: ClassStatus = ClassStatus.ACTIVE
    image: str | None = Field(None, max_length=255)
    started_at: datetime
    ended_at: datetime

    @model_validator(mode="after")
    def validate_bounds(self) -> "ClassCreate":
        _check_class_bounds(self.min_age, self.max_age, self.started_at, self.ended_at)
        return self


class ClassUpdate(BaseModel):
    program_id: UUIDStr | None = None
    mentor_id: UUIDStr | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    min_age: int | None = Field(None, ge=0)
    max_age: int | None = Field(None, ge=0)
    status: ClassStatus | None = None
    image: str | None = Field(None, max_length=255)
    started_at: datetime | None = None
    ended_at: datetime | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "ClassUpdate":
        _check_class_bounds(self.min_age, self.max_age, self.started_at, self.ended_at)
        return self


class ClassResponse(BaseModel):
    id: str
    program_id: str
    mentor_id: str
    name: str
    min_age: int
    max_age: int
    status: ClassStatus
    image: str | None
    started_at: datetime
    ended_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
