from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class RoomType(StrEnum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    DELUXE = "DELUXE"
    FAMILY = "FAMILY"


class RoomStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class RoomOffer(BaseModel):
    model_config = {"frozen": True}

    id: int | str
    number: str
    roomType: RoomType
    capacity: int = Field(ge=1)
    price: Decimal = Field(ge=0)  # per night
    currency: str = Field(pattern=r"^[A-Z]{3}$")
    status: RoomStatus
    description: str | None = None


class RoomPage(BaseModel):
    content: list[RoomOffer]
    totalElements: int | None = None
    totalPages: int | None = None


class RoomSearchCriteria(BaseModel):
    model_config = {"frozen": True}

    check_in: date | None = None
    check_out: date | None = None
    min_capacity: int | None = Field(default=None, ge=1)
    room_type: RoomType | None = None
    max_price: Decimal | None = Field(default=None, ge=0)
