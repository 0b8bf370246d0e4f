"""Repository for program data access."""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.models.program import Program
from app.models.program_class import ProgramClass
from app.repositories.base import BaseRepository


class ProgramRepository(BaseRepository[Program]):
    """Data access layer for programs and the classes they group."""

    model = Program
    list_options = (selectinload(Program.classes).selectinload(ProgramClass.schedules),)
    detail_options = list_options

    async def get_classes(self, program_id: str) -> list[ProgramClass]:
        """Classes of a program with their program, mentor and weekly slots."""
        query = (
            select(ProgramClass)
            .where(ProgramClass.program_id == program_id)
            .options(
                selectinload(ProgramClass.program),
                selectinload(ProgramClass.mentor),
                selectinload(ProgramClass.schedules),
            )
            .order_by(ProgramClass.created_at.desc(), ProgramClass.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
