import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    BookingValidationError,
    HotelApiError,
    MalformedResponseError,
    NetworkError,
    SubmissionError,
)

logger = logging.getLogger(__name__)


def submission_status_code(status_code: int | None) -> int:
    """Backend 4xx answers pass through (e.g. 409 double booking), anything else is a 502."""
    if status_code is not None and 400 <= status_code < 500:
        return status_code
    return 502


async def validation_error_handler(
    _request: Request, exc: BookingValidationError
) -> JSONResponse:
    logger.info("Booking rejected locally: %s (%s)", exc.message, exc.code)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "code": exc.code},
    )


async def submission_error_handler(_request: Request, exc: SubmissionError) -> JSONResponse:
    logger.error("Reservation submission failed: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=submission_status_code(exc.status_code),
        content={"detail": exc.message, "code": exc.code},
    )


async def network_error_handler(_request: Request, exc: NetworkError) -> JSONResponse:
    logger.error("Hotel backend unreachable: %s", exc.message)
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Hotel backend is unreachable. Please try again later.",
            "code": exc.code,
        },
    )


async def malformed_response_handler(
    _request: Request, exc: MalformedResponseError
) -> JSONResponse:
    logger.error("Malformed hotel backend response: %s", exc.message)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Unexpected hotel backend response: {exc.message}", "code": exc.code},
    )


async def hotel_api_error_handler(_request: Request, exc: HotelApiError) -> JSONResponse:
    logger.error("Hotel backend error: %s (status=%s)", exc.message, exc.status_code)
    status_code = 404 if exc.status_code == 404 else 502
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )
