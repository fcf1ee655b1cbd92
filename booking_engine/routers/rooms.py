import logging
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Query

from booking_engine.dependencies import HotelApiDep
from booking_engine.exceptions.custom import InvalidDateRangeError
from booking_engine.rules.availability import filter_rooms
from booking_engine.rules.nights import nights_for, parse_date_range
from booking_engine.schemas.responses import AvailabilityResult
from booking_engine.schemas.rooms import RoomOffer, RoomSearchCriteria, RoomType

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/rooms", response_model=list[RoomOffer])
async def search_rooms(
    api: HotelApiDep,
    check_in: date | None = Query(default=None, alias="checkIn"),
    check_out: date | None = Query(default=None, alias="checkOut"),
    guests: int | None = Query(default=None, ge=1),
    room_type: RoomType | None = Query(default=None, alias="roomType"),
    max_price: Decimal | None = Query(default=None, ge=0, alias="maxPrice"),
) -> list[RoomOffer]:
    if (check_in is None) != (check_out is None):
        raise InvalidDateRangeError("Please select check-in and check-out dates")
    if check_in is not None:
        nights_for(parse_date_range(check_in, check_out))

    criteria = RoomSearchCriteria(
        check_in=check_in,
        check_out=check_out,
        min_capacity=guests,
        room_type=room_type,
        max_price=max_price,
    )
    rooms = await api.search_rooms(
        check_in=check_in.isoformat() if check_in else None,
        check_out=check_out.isoformat() if check_out else None,
        min_capacity=criteria.min_capacity,
        room_type=criteria.room_type,
        max_price=criteria.max_price,
    )
    # The backend may ignore some filters, so apply them again locally
    matching = filter_rooms(rooms, criteria)
    logger.info("Room search matched %d of %d rooms", len(matching), len(rooms))
    return matching


@router.get("/rooms/{room_id}/availability", response_model=AvailabilityResult)
async def room_availability(
    room_id: str,
    api: HotelApiDep,
    check_in: date = Query(alias="checkIn"),
    check_out: date = Query(alias="checkOut"),
) -> AvailabilityResult:
    date_range = parse_date_range(check_in, check_out)
    nights_for(date_range)
    available = await api.check_availability(room_id, date_range)
    return AvailabilityResult(
        room_id=room_id,
        check_in=date_range.check_in,
        check_out=date_range.check_out,
        available=available,
    )
