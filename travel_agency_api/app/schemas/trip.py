"""
Pydantic models for trips and enrollments.

``TripSummary`` is one entry of the trip catalog.  ``EnrollmentDetail``
describes one trip a client is registered for, together with the
registration and payment dates.  Those two dates are ``date`` objects
in Python and ``YYYYMMDD`` integers in the database and in JSON; the
conversion happens only through ``core.dates``.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from travel_agency_api.app.core.dates import decode_date, encode_date


class TripBase(BaseModel):
    id_trip: int = Field(..., alias="IdTrip")
    name: str = Field(..., alias="Name", examples=["Alpine Lakes"])
    description: Optional[str] = Field(None, alias="Description")
    date_from: date = Field(..., alias="DateFrom")
    date_to: date = Field(..., alias="DateTo")
    max_people: int = Field(..., alias="MaxPeople", ge=1)

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class TripSummary(TripBase):
    """A trip with the names of the countries it visits."""

    countries: List[str] = Field(default_factory=list, alias="Countries")


class EnrollmentDetail(TripBase):
    """A trip joined with one client's registration data."""

    registered_at: date = Field(..., alias="RegisteredAt")
    payment_date: Optional[date] = Field(None, alias="PaymentDate")

    @field_validator("registered_at", "payment_date", mode="before")
    @classmethod
    def decode_stored_date(cls, value):
        if isinstance(value, int):
            return decode_date(value)
        return value

    @field_serializer("registered_at", "payment_date")
    def encode_stored_date(self, value: Optional[date]) -> Optional[int]:
        return encode_date(value) if value is not None else None


class EnrollmentConfirmation(BaseModel):
    """Response body returned after a successful registration."""

    id_client: int = Field(..., alias="IdClient")
    id_trip: int = Field(..., alias="IdTrip")
    registered_at: date = Field(..., alias="RegisteredAt")
    message: str = Field("Client successfully registered for the trip.", alias="Message")

    model_config = {
        "populate_by_name": True,
    }

    @field_serializer("registered_at")
    def encode_registered_at(self, value: date) -> int:
        return encode_date(value)
