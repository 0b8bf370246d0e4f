"""Declarative filter for staff accounts."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.user import User, UserRole


class UserFilter(Filter):
    """Query-param filter for the ``GET /users`` endpoint."""

    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    email__ilike: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = User
