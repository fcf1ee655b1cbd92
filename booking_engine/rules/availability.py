from datetime import date

from booking_engine.exceptions.custom import CapacityExceededError, RoomOutOfServiceError
from booking_engine.rules.nights import nights_for
from booking_engine.schemas.reservations import DateRange
from booking_engine.schemas.rooms import RoomOffer, RoomSearchCriteria, RoomStatus


def validate_booking(
    room: RoomOffer,
    date_range: DateRange,
    number_of_guests: int,
    today: date | None = None,
) -> None:
    """Local admissibility check. Returns None when the booking may be submitted.

    OCCUPIED only describes the room right now, not the requested stay, so it
    is not rejected here; the backend availability endpoint has the final say.
    """
    if room.status == RoomStatus.OUT_OF_SERVICE:
        raise RoomOutOfServiceError(f"Room {room.number} is out of service")

    if number_of_guests < 1:
        raise CapacityExceededError("At least 1 guest is required", room.capacity)
    if number_of_guests > room.capacity:
        raise CapacityExceededError(
            f"Maximum capacity is {room.capacity} guests", room.capacity
        )

    nights_for(date_range, today=today)


def matches_criteria(room: RoomOffer, criteria: RoomSearchCriteria) -> bool:
    if room.status == RoomStatus.OUT_OF_SERVICE:
        return False
    if criteria.room_type is not None and room.roomType != criteria.room_type:
        return False
    if criteria.min_capacity is not None and room.capacity < criteria.min_capacity:
        return False
    if criteria.max_price is not None and room.price > criteria.max_price:
        return False
    return True


def filter_rooms(rooms: list[RoomOffer], criteria: RoomSearchCriteria) -> list[RoomOffer]:
    return [room for room in rooms if matches_criteria(room, criteria)]
