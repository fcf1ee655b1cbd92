import logging
from collections.abc import Awaitable, Callable
from datetime import date
from decimal import Decimal

import httpx

from booking_engine.attempts import BookingAttempt
from booking_engine.exceptions.custom import (
    BookingValidationError,
    HotelApiError,
    InvalidPointsError,
    NetworkError,
    RoomUnavailableError,
    SubmissionError,
    SubmissionNetworkError,
)
from booking_engine.rules.availability import validate_booking
from booking_engine.rules.loyalty import DEFAULT_UNIT_VALUE, clamp_points_request
from booking_engine.rules.pricing import compute_price_breakdown
from booking_engine.schemas.loyalty import LoyaltyAccount
from booking_engine.schemas.pricing import PriceBreakdown
from booking_engine.schemas.reservations import (
    BookingRequest,
    DateRange,
    ReservationConfirmation,
)
from booking_engine.schemas.rooms import RoomOffer
from booking_engine.services.hotel_api import HotelApiService, error_message

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error occurred. Please check your connection and try again."
UNAVAILABLE_MESSAGE = "Room not available for selected dates"
FAILURE_MESSAGE = "Booking failed. Please try again."

SubmitFn = Callable[[BookingRequest], Awaitable[ReservationConfirmation]]


def build_booking_request(
    room: RoomOffer,
    date_range: DateRange,
    number_of_guests: int,
    points_used: int,
) -> BookingRequest:
    return BookingRequest(
        roomId=room.id,
        checkIn=date_range.check_in,
        checkOut=date_range.check_out,
        numberOfGuests=number_of_guests,
        pointsUsed=points_used,
        currency=room.currency,
    )


async def build_and_submit(
    room: RoomOffer,
    date_range: DateRange,
    number_of_guests: int,
    points_used: int,
    submit_fn: SubmitFn,
    *,
    today: date | None = None,
) -> ReservationConfirmation:
    """Validate, build the reservation payload and submit it exactly once.

    Validation errors are raised before ``submit_fn`` is touched. Anything that
    goes wrong inside ``submit_fn`` surfaces as SubmissionError; there is no
    retry, a second booking request could create a duplicate reservation.
    """
    validate_booking(room, date_range, number_of_guests, today=today)
    if points_used < 0:
        raise InvalidPointsError("Points to redeem cannot be negative")

    request = build_booking_request(room, date_range, number_of_guests, points_used)

    try:
        return await submit_fn(request)
    except SubmissionError:
        raise
    except NetworkError as exc:
        raise SubmissionNetworkError(NETWORK_ERROR_MESSAGE) from exc
    except HotelApiError as exc:
        raise SubmissionError(exc.message, status_code=exc.status_code) from exc
    except httpx.HTTPStatusError as exc:
        raise SubmissionError(
            error_message(exc.response), status_code=exc.response.status_code
        ) from exc
    except httpx.TransportError as exc:
        raise SubmissionNetworkError(NETWORK_ERROR_MESSAGE) from exc
    except Exception as exc:
        logger.exception("Reservation submission for room %s failed unexpectedly", room.id)
        raise SubmissionError(FAILURE_MESSAGE) from exc


class BookingService:
    def __init__(
        self,
        api: HotelApiService,
        *,
        unit_value: Decimal = DEFAULT_UNIT_VALUE,
        tax_rate: Decimal = Decimal("0"),
        points_per_unit: int = 1,
    ) -> None:
        self._api = api
        self._unit_value = unit_value
        self._tax_rate = tax_rate
        self._points_per_unit = points_per_unit

    def price(
        self,
        room: RoomOffer,
        date_range: DateRange,
        points: int,
        account: LoyaltyAccount | None,
        today: date | None = None,
    ) -> PriceBreakdown:
        return compute_price_breakdown(
            room,
            date_range,
            points,
            account,
            unit_value=self._unit_value,
            tax_rate=self._tax_rate,
            points_per_unit=self._points_per_unit,
            today=today,
        )

    async def _load(
        self, room_id: int | str, points: int
    ) -> tuple[RoomOffer, LoyaltyAccount | None]:
        room = await self._api.get_room(room_id)
        account = None
        if points > 0:
            account = await self._api.get_loyalty_account()
        return room, account

    async def quote(
        self,
        room_id: int | str,
        date_range: DateRange,
        points_requested: int = 0,
        today: date | None = None,
    ) -> PriceBreakdown:
        """Price breakdown with the points input clamped like the booking form."""
        room, account = await self._load(room_id, points_requested)

        base = self.price(room, date_range, 0, None, today=today)
        balance = account.balance if account is not None else 0
        points = clamp_points_request(
            points_requested, balance, base.subtotal, self._unit_value
        )
        if points != points_requested:
            logger.debug(
                "Points request for room %s clamped from %d to %d",
                room.id, points_requested, points,
            )
        breakdown = self.price(room, date_range, points, account, today=today)
        return breakdown.model_copy(update={"points_requested": points_requested})

    async def book(
        self,
        room_id: int | str,
        date_range: DateRange,
        number_of_guests: int,
        points_used: int = 0,
        today: date | None = None,
    ) -> BookingAttempt:
        room, account = await self._load(room_id, points_used)

        attempt = BookingAttempt()
        attempt.mark_validating()
        try:
            validate_booking(room, date_range, number_of_guests, today=today)
            breakdown = self.price(room, date_range, points_used, account, today=today)
            if not await self._api.check_availability(room.id, date_range):
                raise RoomUnavailableError(UNAVAILABLE_MESSAGE)
        except BookingValidationError as exc:
            logger.info("Booking attempt %s rejected: %s", attempt.attempt_id, exc.message)
            attempt.mark_rejected(exc)
            return attempt

        attempt.mark_submitting(breakdown)
        logger.info(
            "Booking attempt %s submitting room %s (%s to %s)",
            attempt.attempt_id, room.id, date_range.check_in, date_range.check_out,
        )
        try:
            confirmation = await build_and_submit(
                room,
                date_range,
                number_of_guests,
                breakdown.points_applied,
                self._api.create_reservation,
                today=today,
            )
        except SubmissionError as exc:
            logger.error("Booking attempt %s failed: %s", attempt.attempt_id, exc.message)
            attempt.mark_failed(exc)
            return attempt

        attempt.mark_confirmed(confirmation)
        logger.info("Booking attempt %s confirmed as reservation %s", attempt.attempt_id, confirmation.id)
        return attempt
