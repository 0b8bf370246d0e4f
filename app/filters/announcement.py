"""Declarative filter for announcements."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.announcement import Announcement, AnnouncementCategory


class AnnouncementFilter(Filter):
    """Query-param filter for the ``GET /announcements`` endpoint."""

    category: Optional[AnnouncementCategory] = None
    title__ilike: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = Announcement
