from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.models.order import Order, OrderItem


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_order(
        self, user_id: Optional[int], session_id: str, total: Decimal
    ) -> Order:
        order = Order(
            user_id=user_id,
            session_id=session_id,
            total_amount=total,
            status="created",
            payment_reference=None,
        )
        self.db.add(order)
        self.db.flush()  # assigns order.id
        return order

    def add_item(
        self, order: Order, variant_id: int, quantity: int, unit_price: Decimal
    ) -> OrderItem:
        item = OrderItem(
            order_id=order.id,
            product_variant_id=variant_id,
            quantity=quantity,
            unit_price=unit_price,
        )
        self.db.add(item)
        self.db.flush()
        return item
