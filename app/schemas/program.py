"""Pydantic schemas for programs."""

from datetime import datetime

from pydantic import BaseModel, Field


class ProgramCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    icon: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class ProgramUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    icon: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=255)


class ProgramResponse(BaseModel):
    id: str
    name: str
    description: str
    icon: str | None
    image: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
