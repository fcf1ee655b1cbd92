from fastapi import APIRouter

from booking_engine.dependencies import BookingDep
from booking_engine.rules.nights import parse_date_range
from booking_engine.schemas.pricing import PriceBreakdown
from booking_engine.schemas.responses import QuoteRequest

router = APIRouter()


@router.post("/quote", response_model=PriceBreakdown)
async def quote(request: QuoteRequest, service: BookingDep) -> PriceBreakdown:
    date_range = parse_date_range(request.check_in, request.check_out)
    return await service.quote(
        request.room_id,
        date_range,
        points_requested=request.points_requested,
    )
