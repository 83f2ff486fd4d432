"""
Money math for checkout.

All amounts are Decimal with two places; rounding is half-up, matching how
prices are shown to customers.
"""
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from app.models.coupon import Coupon

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form coupon expiry is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def line_total(qty: int, unit_price) -> Decimal:
    return to_money(qty * to_money(unit_price))


def coupon_rejection(coupon: Optional[Coupon], subtotal: Decimal, now: datetime) -> Optional[str]:
    """Why `coupon` can't be used on this subtotal, or None if it can."""
    if coupon is None:
        return "unknown code"
    if not coupon.is_active:
        return "inactive"
    if coupon.expires_at is not None and not _naive_utc(coupon.expires_at) > _naive_utc(now):
        return "expired"
    if subtotal < to_money(coupon.min_subtotal):
        return f"subtotal below minimum {to_money(coupon.min_subtotal)}"
    return None


def coupon_discount(coupon: Optional[Coupon], subtotal: Decimal, now: datetime) -> Decimal:
    """
    Discount `coupon` grants on `subtotal`, clamped to [0, subtotal].
    An unusable coupon simply grants nothing.
    """
    if coupon_rejection(coupon, subtotal, now) is not None:
        return ZERO
    value = to_money(coupon.value)
    if coupon.discount_type == "percent":
        discount = to_money(subtotal * value / 100)
    else:
        discount = value
    return max(ZERO, min(discount, subtotal))


def order_total(subtotal: Decimal, discount: Decimal) -> Decimal:
    return max(ZERO, to_money(subtotal - discount))
