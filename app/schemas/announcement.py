"""Pydantic schemas for announcements."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.announcement import AnnouncementCategory


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: AnnouncementCategory
    content: str = Field(..., min_length=1)


class AnnouncementUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    category: AnnouncementCategory | None = None
    content: str | None = Field(None, min_length=1)


class AnnouncementResponse(BaseModel):
    id: str
    title: str
    category: AnnouncementCategory
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
