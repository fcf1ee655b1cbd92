from datetime import date

from pydantic import BaseModel, Field


class DateRange(BaseModel):
    model_config = {"frozen": True}

    check_in: date
    check_out: date


class BookingRequest(BaseModel):
    """Payload for POST /client/reservations."""

    model_config = {"frozen": True}

    roomId: int | str
    checkIn: date
    checkOut: date
    numberOfGuests: int = Field(ge=1)
    pointsUsed: int = Field(ge=0)
    currency: str


class ReservationConfirmation(BaseModel):
    model_config = {"frozen": True, "extra": "allow"}

    id: int | str
    status: str | None = None


class AvailabilityResponse(BaseModel):
    available: bool
