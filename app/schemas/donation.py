"""Pydantic schemas for donation campaigns and their allocations."""

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, Field, HttpUrl, PlainSerializer, model_validator

from app.models.donation import DonationStatus

# Validated as a URL, stored and returned as plain text
FormUrl = Annotated[HttpUrl, PlainSerializer(str, return_type=str)]


def _check_date_range(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValueError("start_date must be on or before end_date")


class DonationCreate(BaseModel):
    """New campaign. Collected amount and progress start at zero."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: DonationStatus = DonationStatus.UPCOMING
    target_amount: int = Field(..., gt=0)
    donor_count: int = Field(0, ge=0)
    google_form_url: FormUrl
    image: str | None = Field(None, max_length=255)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_dates(self) -> "DonationCreate":
        _check_date_range(self.start_date, self.end_date)
        return self


class DonationUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: DonationStatus | None = None
    target_amount: int | None = Field(None, gt=0)
    collected_amount: int | None = Field(None, ge=0)
    donor_count: int | None = Field(None, ge=0)
    google_form_url: FormUrl | None = None
    image: str | None = Field(None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "DonationUpdate":
        _check_date_range(self.start_date, self.end_date)
        return self


class AllocationCreate(BaseModel):
    """One spending line. ``percent`` defaults to ``amount`` over the target."""

    title: str = Field(..., min_length=1, max_length=255)
    amount: int = Field(..., gt=0)
    percent: int | None = Field(None, ge=0, le=100)


class AllocationUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    amount: int | None = Field(None, gt=0)
    percent: int | None = Field(None, ge=0, le=100)


class AllocationResponse(BaseModel):
    id: str
    donation_id: str
    title: str
    amount: int
    percent: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DonationResponse(BaseModel):
    id: str
    title: str
    description: str | None
    status: DonationStatus
    target_amount: int
    collected_amount: int
    percent: int
    donor_count: int
    google_form_url: str
    image: str | None
    start_date: date
    end_date: date
    created_at: datetime
    updated_at: datetime
    allocations: list[AllocationResponse] = []

    model_config = {"from_attributes": True}
