from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field

from booking_engine.exceptions.custom import BookingError, InvalidTransitionError
from booking_engine.schemas.pricing import PriceBreakdown
from booking_engine.schemas.reservations import ReservationConfirmation


class AttemptState(StrEnum):
    idle = "idle"
    validating = "validating"
    rejected = "rejected"
    submitting = "submitting"
    confirmed = "confirmed"
    failed = "failed"


TERMINAL_STATES = frozenset({AttemptState.rejected, AttemptState.confirmed, AttemptState.failed})

_ALLOWED: dict[AttemptState, frozenset[AttemptState]] = {
    AttemptState.idle: frozenset({AttemptState.validating}),
    AttemptState.validating: frozenset({AttemptState.rejected, AttemptState.submitting}),
    AttemptState.submitting: frozenset({AttemptState.confirmed, AttemptState.failed}),
}


class BookingAttempt(BaseModel):
    """One user-initiated booking. A retry is a new attempt."""

    attempt_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    state: AttemptState = AttemptState.idle
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None
    breakdown: PriceBreakdown | None = None
    confirmation: ReservationConfirmation | None = None
    error_code: str | None = None
    error_message: str | None = None
    error_status: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def _move(self, target: AttemptState) -> None:
        if target not in _ALLOWED.get(self.state, frozenset()):
            raise InvalidTransitionError(self.state, target)
        self.state = target
        if target in TERMINAL_STATES:
            self.finished_at = datetime.now(timezone.utc)

    def mark_validating(self) -> None:
        self._move(AttemptState.validating)

    def mark_submitting(self, breakdown: PriceBreakdown | None = None) -> None:
        self._move(AttemptState.submitting)
        if breakdown is not None:
            self.breakdown = breakdown

    def mark_rejected(self, error: BookingError) -> None:
        self._move(AttemptState.rejected)
        self._record(error)

    def mark_confirmed(self, confirmation: ReservationConfirmation) -> None:
        self._move(AttemptState.confirmed)
        self.confirmation = confirmation

    def mark_failed(self, error: BookingError) -> None:
        self._move(AttemptState.failed)
        self._record(error)

    def _record(self, error: BookingError) -> None:
        self.error_code = error.code
        self.error_message = error.message
        self.error_status = getattr(error, "status_code", None)
