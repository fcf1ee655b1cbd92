from fastapi import APIRouter
from fastapi.responses import JSONResponse

from booking_engine.attempts import AttemptState
from booking_engine.dependencies import BookingDep
from booking_engine.exceptions.handlers import submission_status_code
from booking_engine.rules.nights import parse_date_range
from booking_engine.schemas.responses import BookingAttemptResponse, BookingRequestBody

router = APIRouter()


@router.post("/bookings", response_model=BookingAttemptResponse, status_code=201)
async def create_booking(request: BookingRequestBody, service: BookingDep) -> JSONResponse:
    date_range = parse_date_range(request.check_in, request.check_out)
    attempt = await service.book(
        request.room_id,
        date_range,
        request.number_of_guests,
        points_used=request.points_used,
    )

    if attempt.state == AttemptState.confirmed:
        status_code = 201
    elif attempt.state == AttemptState.rejected:
        status_code = 422
    else:
        status_code = submission_status_code(attempt.error_status)

    body = BookingAttemptResponse.from_attempt(attempt)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
