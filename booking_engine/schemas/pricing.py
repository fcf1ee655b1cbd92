from decimal import Decimal

from pydantic import BaseModel


class PriceBreakdown(BaseModel):
    model_config = {"frozen": True}

    nights: int
    price_per_night: Decimal
    subtotal: Decimal
    points_requested: int = 0
    points_applied: int = 0  # after clamping to the subtotal
    points_discount: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    total: Decimal
    currency: str
    points_earned: int = 0
    formatted_total: str = ""
