from typing import Annotated

from fastapi import Depends, Request

from booking_engine.config import Settings
from booking_engine.services.booking import BookingService
from booking_engine.services.hotel_api import HotelApiService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_hotel_api(request: Request) -> HotelApiService:
    """Backend client acting as the caller when it sends a bearer token.

    Without one, the configured service identity is used as a whole and any
    caller-supplied X-User-Id is ignored.
    """
    api: HotelApiService = request.app.state.hotel_api
    token = bearer_token(request.headers.get("authorization"))
    if token is None:
        return api
    return api.with_session(token, request.headers.get("x-user-id"))


HotelApiDep = Annotated[HotelApiService, Depends(get_hotel_api)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_booking_service(api: HotelApiDep, settings: SettingsDep) -> BookingService:
    return BookingService(
        api,
        unit_value=settings.points_unit_value,
        tax_rate=settings.tax_rate,
        points_per_unit=settings.points_per_currency_unit,
    )


BookingDep = Annotated[BookingService, Depends(get_booking_service)]
