"""Pydantic schemas for weekly class schedules."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from app.constants import TIME_PATTERN
from app.schemas.common import UUIDStr


def _check_time_order(start_time: str | None, end_time: str | None) -> None:
    # Zero-padded HH:MM strings order the same way as the times they encode
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValueError("start_time must be earlier than end_time")


class ScheduleCreate(BaseModel):
    class_id: UUIDStr
    day_of_week: int = Field(..., ge=1, le=7, description="1=Monday .. 7=Sunday")
    start_time: str = Field(..., pattern=TIME_PATTERN, examples=["16:00"])
    end_time: str = Field(..., pattern=TIME_PATTERN, examples=["17:30"])

    @model_validator(mode="after")
    def validate_time_order(self) -> "ScheduleCreate":
        _check_time_order(self.start_time, self.end_time)
        return self


class ScheduleUpdate(BaseModel):
    class_id: UUIDStr | None = None
    day_of_week: int | None = Field(None, ge=1, le=7)
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def validate_time_order(self) -> "ScheduleUpdate":
        _check_time_order(self.start_time, self.end_time)
        return self


class ScheduleResponse(BaseModel):
    id: str
    class_id: str
    day_of_week: int
    start_time: str
    end_time: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
