import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from booking_engine.config import Settings
from booking_engine.exceptions.custom import (
    BookingValidationError,
    HotelApiError,
    MalformedResponseError,
    NetworkError,
    SubmissionError,
)
from booking_engine.exceptions.handlers import (
    hotel_api_error_handler,
    malformed_response_handler,
    network_error_handler,
    submission_error_handler,
    validation_error_handler,
)
from booking_engine.routers.bookings import router as bookings_router
from booking_engine.routers.quotes import router as quotes_router
from booking_engine.routers.rooms import router as rooms_router
from booking_engine.services.hotel_api import HotelApiService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        app.state.settings = settings
        app.state.hotel_api = HotelApiService(
            client,
            settings.hotel_api_base_url,
            token=settings.hotel_api_token,
            user_id=settings.hotel_api_user_id,
        )

        yield


app = FastAPI(title="Booking Engine", lifespan=lifespan)

app.add_exception_handler(BookingValidationError, validation_error_handler)
app.add_exception_handler(SubmissionError, submission_error_handler)
app.add_exception_handler(NetworkError, network_error_handler)
app.add_exception_handler(MalformedResponseError, malformed_response_handler)
app.add_exception_handler(HotelApiError, hotel_api_error_handler)

app.include_router(quotes_router)
app.include_router(bookings_router)
app.include_router(rooms_router)
