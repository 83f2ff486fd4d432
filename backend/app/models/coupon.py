from sqlalchemy import Boolean, Column, DateTime, Numeric, String

from app.db import Base


class Coupon(Base):
    __tablename__ = "coupons"

    code = Column(String(64), primary_key=True)
    discount_type = Column(String(16), nullable=False, default="percent")  # percent, fixed
    value = Column(Numeric(10, 2), nullable=False, default=0)
    min_subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=True)  # naive UTC

    def __repr__(self):
        return f"<Coupon code={self.code} {self.discount_type}={self.value}>"
