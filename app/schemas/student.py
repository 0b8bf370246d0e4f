"""Pydantic schemas for students."""

from datetime import datetime

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    """Registration form filled in by a parent."""

    student_name: str = Field(..., min_length=1, max_length=255)
    student_age: int = Field(..., ge=1, le=120)
    parent_name: str = Field(..., min_length=1, max_length=255)
    whatsapp: str = Field(..., min_length=10, max_length=15)


class StudentUpdate(BaseModel):
    student_name: str | None = Field(None, min_length=1, max_length=255)
    student_age: int | None = Field(None, ge=1, le=120)
    parent_name: str | None = Field(None, min_length=1, max_length=255)
    whatsapp: str | None = Field(None, min_length=10, max_length=15)


class StudentResponse(BaseModel):
    id: str
    student_name: str
    student_age: int
    parent_name: str
    whatsapp: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
