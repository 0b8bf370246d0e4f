"""Repository for weekly schedule data access."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import selectinload

from app.models.program_class import ProgramClass
from app.models.schedule import Schedule
from app.repositories.base import BaseRepository


class InvalidScheduleError(ValueError):
    """Raised when a partial update leaves ``start_time`` at or after ``end_time``."""


class ScheduleRepository(BaseRepository[Schedule]):
    model = Schedule
    duplicate_message = "Class already has a schedule starting at that day and time"
    list_options = (selectinload(Schedule.program_class).selectinload(ProgramClass.mentor),)
    detail_options = list_options

    async def create(self, values: dict[str, Any]) -> Schedule:
        await self.ensure_exists(ProgramClass, values["class_id"])
        return await super().create(values)

    async def update(self, record_id: str, data: BaseModel) -> Schedule | None:
        record = await self.get_by_id(record_id)
        if record is None:
            return None

        changes = self._changes(data)
        if "class_id" in changes:
            await self.ensure_exists(ProgramClass, changes["class_id"])
        if changes.get("start_time", record.start_time) >= changes.get(
            "end_time", record.end_time
        ):
            raise InvalidScheduleError("start_time must be earlier than end_time")
        return await super().update(record_id, data)
