from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.coupon_repo import CouponRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.schemas.checkout_schema import ByVariantId, BySkuAndWeight, CheckoutIn
from app.services.pricing import (
    ZERO,
    coupon_discount,
    coupon_rejection,
    line_total,
    order_total,
    to_money,
    utcnow,
)
from app.utils.logging import get_logger
from app.utils.transactions import unit_of_work

log = get_logger("app.checkout", "CHECKOUT")


class CheckoutException(Exception):
    pass


class VariantNotFoundError(CheckoutException):
    def __init__(self, message: str = "Variant not found"):
        super().__init__(message)


class PersistenceError(CheckoutException):
    """A store-level failure (connection, constraint) while writing the order."""

    def __init__(self, message: str = "Failed to save order"):
        super().__init__(message)


@dataclass(frozen=True)
class ResolvedLine:
    variant_id: int
    qty: int
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return line_total(self.qty, self.unit_price)


@dataclass(frozen=True)
class CheckoutResult:
    order_id: int
    user_id: Optional[int]
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    lines: List[ResolvedLine] = field(default_factory=list)


class CheckoutService:
    """
    Turns a validated cart into a persisted order.

    The whole checkout (user lookup/creation, price resolution, coupon, order
    and order items) is one transaction on the injected session: it either
    commits completely or leaves nothing behind. Closing the session is the
    caller's job (see `app.db.get_db`).
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock
        self.users = UserRepository(db)
        self.products = ProductRepository(db)
        self.coupons = CouponRepository(db)
        self.orders = OrderRepository(db)

    def checkout(self, request: CheckoutIn) -> CheckoutResult:
        try:
            with unit_of_work(self.db):
                user_id = self._resolve_user(request.email, request.phone)

                lines = []
                subtotal = ZERO
                for item in request.items:
                    line = self._resolve_line(item)
                    subtotal += line.total
                    lines.append(line)

                discount = self._apply_coupon(request.coupon_code, subtotal)
                total = order_total(subtotal, discount)

                order = self.orders.create_order(user_id, request.session_id, total)
                for line in lines:
                    self.orders.add_item(order, line.variant_id, line.qty, line.unit_price)
                order_id = order.id
        except SQLAlchemyError as e:
            log.error(f"checkout rolled back, store error: {e}")
            raise PersistenceError() from e

        log.info(
            f"order {order_id} created user={user_id} items={len(lines)} "
            f"subtotal={subtotal} discount={discount} total={total}"
        )
        return CheckoutResult(
            order_id=order_id,
            user_id=user_id,
            subtotal=subtotal,
            discount=discount,
            total=total,
            lines=lines,
        )

    def _resolve_user(self, email: str, phone: str) -> Optional[int]:
        if not email:
            return None  # guest checkout
        user = self.users.get_by_email(email)
        if user is None:
            user = self.users.create_guest(email, phone)
            log.debug(f"created user {user.id} for {email!r}")
        return user.id

    def _resolve_line(self, item) -> ResolvedLine:
        if isinstance(item, ByVariantId):
            variant = self.products.get_variant(item.variant_id)
        elif isinstance(item, BySkuAndWeight):
            variant = self.products.find_variant(item.product_sku, item.grams)
        else:
            raise TypeError(f"unsupported line item: {type(item).__name__}")
        if variant is None:
            raise VariantNotFoundError()
        return ResolvedLine(variant_id=variant.id, qty=item.qty, unit_price=to_money(variant.price))

    def _apply_coupon(self, code: str, subtotal: Decimal) -> Decimal:
        if not code:
            return ZERO
        coupon = self.coupons.get_by_code(code)
        now = self.clock()
        reason = coupon_rejection(coupon, subtotal, now)
        if reason:
            # checkout still goes through, just without a discount
            log.info(f"coupon {code!r} not applied: {reason}")
            return ZERO
        return coupon_discount(coupon, subtotal, now)
