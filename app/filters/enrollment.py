"""Declarative filter for enrollments."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.enrollment import Enrollment, EnrollmentStatus


class EnrollmentFilter(Filter):
    status: Optional[EnrollmentStatus] = None
    student_id: Optional[str] = None
    class_id: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = Enrollment
