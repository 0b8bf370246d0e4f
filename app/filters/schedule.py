"""Declarative filter for weekly schedules."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.schedule import Schedule


class ScheduleFilter(Filter):
    class_id: Optional[str] = None
    day_of_week: Optional[int] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = Schedule
