from datetime import date
from decimal import Decimal

from booking_engine.rules.loyalty import (
    DEFAULT_UNIT_VALUE,
    compute_discount,
    effective_points,
    estimate_points_earned,
    round_money,
)
from booking_engine.rules.nights import nights_for
from booking_engine.schemas.loyalty import LoyaltyAccount
from booking_engine.schemas.pricing import PriceBreakdown
from booking_engine.schemas.reservations import DateRange
from booking_engine.schemas.rooms import RoomOffer

DEFAULT_CURRENCY = "EUR"


def compute_price_breakdown(
    room: RoomOffer,
    date_range: DateRange,
    points_requested: int,
    account: LoyaltyAccount | None,
    *,
    unit_value: Decimal = DEFAULT_UNIT_VALUE,
    tax_rate: Decimal = Decimal("0"),
    points_per_unit: int = 1,
    today: date | None = None,
) -> PriceBreakdown:
    """Price a stay: nights x rate, minus the loyalty discount, plus tax.

    Date and points errors from the underlying calculators propagate unchanged.
    A missing loyalty account is treated as a zero balance.
    """
    nights = nights_for(date_range, today=today)
    subtotal = round_money(nights * room.price)

    balance = account.balance if account is not None else 0
    discount = compute_discount(points_requested, balance, subtotal, unit_value)
    applied = effective_points(points_requested, subtotal, unit_value)

    net = max(Decimal("0"), subtotal - discount)
    tax = round_money(net * tax_rate)
    total = round_money(net + tax)

    return PriceBreakdown(
        nights=nights,
        price_per_night=room.price,
        subtotal=subtotal,
        points_requested=points_requested,
        points_applied=applied,
        points_discount=discount,
        tax=tax,
        total=total,
        currency=room.currency,
        points_earned=estimate_points_earned(total, points_per_unit),
        formatted_total=format_amount(total, room.currency),
    )


def format_amount(amount: Decimal | None, currency: str | None = None) -> str:
    """Render an amount the way the booking screens show it, e.g. ``300.00 EUR``."""
    code = currency or DEFAULT_CURRENCY
    if amount is None:
        return f"0.00 {code}"
    return f"{round_money(amount):.2f} {code}"
