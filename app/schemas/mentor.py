"""Pydantic schemas for mentors."""

from datetime import datetime

from pydantic import BaseModel, Field


class MentorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact: str = Field(..., min_length=1, max_length=255)


class MentorUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    contact: str | None = Field(None, min_length=1, max_length=255)


class MentorResponse(BaseModel):
    id: str
    name: str
    contact: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
