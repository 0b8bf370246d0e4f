"""Declarative filter for donation campaigns."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.donation import Donation, DonationStatus


class DonationFilter(Filter):
    status: Optional[DonationStatus] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = Donation
