"""Loyalty point redemption and accrual math.

1 point = ``unit_value`` of currency (0.01 by default). Redemption is a hard
rule against the balance and a soft rule against the subtotal: a discount is
never allowed to push the price below zero, so the point count is capped
instead of rejected.
"""

from decimal import ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Decimal

from booking_engine.exceptions.custom import InsufficientPointsError, InvalidPointsError

DEFAULT_UNIT_VALUE = Decimal("0.01")
CENTS = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def points_covering(subtotal: Decimal, unit_value: Decimal = DEFAULT_UNIT_VALUE) -> int:
    """Largest point count whose value does not exceed ``subtotal``."""
    if subtotal <= 0:
        return 0
    return int((Decimal(subtotal) / unit_value).to_integral_value(rounding=ROUND_FLOOR))


def effective_points(
    points_requested: int,
    subtotal: Decimal,
    unit_value: Decimal = DEFAULT_UNIT_VALUE,
) -> int:
    return min(points_requested, points_covering(subtotal, unit_value))


def compute_discount(
    points_requested: int,
    account_balance: int,
    subtotal: Decimal,
    unit_value: Decimal = DEFAULT_UNIT_VALUE,
) -> Decimal:
    """Monetary discount for a redemption, capped at ``subtotal``.

    Raises InsufficientPointsError when more points are requested than owned.
    """
    if points_requested < 0:
        raise InvalidPointsError("Points to redeem cannot be negative")
    if points_requested > account_balance:
        raise InsufficientPointsError(points_requested, account_balance)

    points = effective_points(points_requested, subtotal, unit_value)
    return round_money(points * unit_value)


def max_redeemable_points(
    balance: int,
    subtotal: Decimal,
    unit_value: Decimal = DEFAULT_UNIT_VALUE,
) -> int:
    return max(0, min(balance, points_covering(subtotal, unit_value)))


def clamp_points_request(
    requested: int,
    balance: int,
    subtotal: Decimal,
    unit_value: Decimal = DEFAULT_UNIT_VALUE,
) -> int:
    """Clamp a points input to ``[0, max_redeemable_points]`` like the booking form does."""
    return min(max(0, requested), max_redeemable_points(balance, subtotal, unit_value))


def estimate_points_earned(amount: Decimal, points_per_unit: int = 1) -> int:
    """Points a stay is expected to earn: one per whole currency unit spent."""
    if amount is None or amount <= 0:
        return 0
    return int(Decimal(amount).to_integral_value(rounding=ROUND_DOWN)) * points_per_unit
