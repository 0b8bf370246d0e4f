"""Repository for class data access."""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import selectinload

from app.models.base import as_utc
from app.models.mentor import Mentor
from app.models.program import Program
from app.models.program_class import ProgramClass
from app.repositories.base import BaseRepository


class InvalidClassError(ValueError):
    """Raised when a partial update leaves a class with inconsistent bounds."""


class ClassRepository(BaseRepository[ProgramClass]):
    """Data access layer for classes.

    A class must point at an existing program and mentor; both are checked
    before writing.
    """

    model = ProgramClass
    list_options = (selectinload(ProgramClass.program), selectinload(ProgramClass.mentor))
    detail_options = (*list_options, selectinload(ProgramClass.schedules))

    async def create(self, values: dict[str, Any]) -> ProgramClass:
        await self.ensure_exists(Program, values["program_id"])
        await self.ensure_exists(Mentor, values["mentor_id"])
        return await super().create(values)

    async def update(self, record_id: str, data: BaseModel) -> ProgramClass | None:
        """Update a class, re-checking references and bounds after the merge.

        Raises:
            RelatedRecordNotFoundError: If a new program or mentor is unknown.
            InvalidClassError: If the merged ages or dates are out of order.
        """
        record = await self.get_by_id(record_id)
        if record is None:
            return None

        changes = self._changes(data)
        if "program_id" in changes:
            await self.ensure_exists(Program, changes["program_id"])
        if "mentor_id" in changes:
            await self.ensure_exists(Mentor, changes["mentor_id"])

        min_age = changes.get("min_age", record.min_age)
        max_age = changes.get("max_age", record.max_age)
        if min_age > max_age:
            raise InvalidClassError("min_age must be less than or equal to max_age")
        started_at = changes.get("started_at", record.started_at)
        ended_at = changes.get("ended_at", record.ended_at)
        if as_utc(started_at) >= as_utc(ended_at):
            raise InvalidClassError("started_at must be before ended_at")

        return await super().update(record_id, data)
