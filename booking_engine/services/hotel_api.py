import logging
from decimal import Decimal
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from booking_engine.exceptions.custom import HotelApiError, MalformedResponseError, NetworkError
from booking_engine.schemas.loyalty import LoyaltyAccount
from booking_engine.schemas.reservations import (
    AvailabilityResponse,
    BookingRequest,
    DateRange,
    ReservationConfirmation,
)
from booking_engine.schemas.rooms import RoomOffer, RoomPage, RoomType

logger = logging.getLogger(__name__)

ROOMS_PATH = "/rooms"
LOYALTY_ACCOUNT_PATH = "/loyalty/account"
RESERVATIONS_PATH = "/client/reservations"

ModelT = TypeVar("ModelT", bound=BaseModel)


def room_path(room_id: int | str) -> str:
    return f"{ROOMS_PATH}/{room_id}"


def availability_path(room_id: int | str) -> str:
    return f"{ROOMS_PATH}/{room_id}/availability"


def error_message(resp: httpx.Response) -> str:
    """Backend message from a ``{"message": ...}`` body, else a status-based fallback."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"]:
        return data["message"]
    return f"HTTP error! status: {resp.status_code}"


class HotelApiService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        token: str | None = None,
        user_id: str | None = None,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        if user_id:
            self._headers["X-User-Id"] = str(user_id)

    def with_session(self, token: str, user_id: str | None) -> "HotelApiService":
        """Same client, acting on behalf of the caller's session only.

        The configured token and user id are both dropped.
        """
        return HotelApiService(self._client, self._base_url, token=token, user_id=user_id)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkError() from exc

        if resp.status_code >= 400:
            raise HotelApiError(error_message(resp), status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"{method} {path} returned a non-JSON body", status_code=resp.status_code
            ) from exc

    @staticmethod
    def _parse(model: type[ModelT], data: Any, what: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Malformed %s payload: %s", what, exc)
            raise MalformedResponseError(f"Malformed {what}: {exc.error_count()} invalid field(s)") from exc

    async def get_room(self, room_id: int | str) -> RoomOffer:
        data = await self._request("GET", room_path(room_id))
        return self._parse(RoomOffer, data, "room")

    async def search_rooms(
        self,
        check_in: str | None = None,
        check_out: str | None = None,
        min_capacity: int | None = None,
        room_type: RoomType | None = None,
        max_price: Decimal | None = None,
    ) -> list[RoomOffer]:
        params = {
            "checkIn": check_in,
            "checkOut": check_out,
            "minCapacity": min_capacity,
            "roomType": room_type.value if room_type else None,
            "maxPrice": str(max_price) if max_price is not None else None,
        }
        params = {k: v for k, v in params.items() if v is not None}

        data = await self._request("GET", ROOMS_PATH, params=params)

        # Spring pages wrap the list in "content"; some deployments return a bare list
        if isinstance(data, list):
            data = {"content": data}
        page = self._parse(RoomPage, data, "room page")
        logger.info("Fetched %d rooms", len(page.content))
        return page.content

    async def check_availability(self, room_id: int | str, date_range: DateRange) -> bool:
        data = await self._request(
            "GET",
            availability_path(room_id),
            params={
                "checkIn": date_range.check_in.isoformat(),
                "checkOut": date_range.check_out.isoformat(),
            },
        )
        return self._parse(AvailabilityResponse, data, "availability").available

    async def get_loyalty_account(self) -> LoyaltyAccount:
        data = await self._request("GET", LOYALTY_ACCOUNT_PATH)
        return self._parse(LoyaltyAccount, data, "loyalty account")

    async def create_reservation(self, request: BookingRequest) -> ReservationConfirmation:
        data = await self._request(
            "POST", RESERVATIONS_PATH, json=request.model_dump(mode="json")
        )
        confirmation = self._parse(ReservationConfirmation, data, "reservation confirmation")
        logger.info("Reservation %s created for room %s", confirmation.id, request.roomId)
        return confirmation
