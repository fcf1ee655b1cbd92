from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from booking_engine.attempts import AttemptState, BookingAttempt
from booking_engine.schemas.pricing import PriceBreakdown


class QuoteRequest(BaseModel):
    room_id: int | str
    check_in: date
    check_out: date
    points_requested: int = Field(default=0, ge=0)


class BookingRequestBody(BaseModel):
    room_id: int | str
    check_in: date
    check_out: date
    number_of_guests: int = 1
    points_used: int = Field(default=0, ge=0)


class BookingAttemptResponse(BaseModel):
    attempt_id: str
    state: AttemptState
    created_at: datetime
    finished_at: datetime | None = None
    breakdown: PriceBreakdown | None = None
    confirmation: dict[str, Any] | None = None
    error_code: str | None = None
    message: str | None = None

    @classmethod
    def from_attempt(cls, attempt: BookingAttempt) -> BookingAttemptResponse:
        return cls(
            attempt_id=attempt.attempt_id,
            state=attempt.state,
            created_at=attempt.created_at,
            finished_at=attempt.finished_at,
            breakdown=attempt.breakdown,
            confirmation=attempt.confirmation.model_dump() if attempt.confirmation else None,
            error_code=attempt.error_code,
            message=attempt.error_message,
        )


class AvailabilityResult(BaseModel):
    room_id: str
    check_in: date
    check_out: date
    available: bool
