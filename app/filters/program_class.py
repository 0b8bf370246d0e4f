"""Declarative filter for classes."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.program_class import ClassStatus, ProgramClass


class ClassFilter(Filter):
    """Query-param filter for the ``GET /classes`` endpoint."""

    status: Optional[ClassStatus] = None
    program_id: Optional[str] = None
    mentor_id: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = ProgramClass
