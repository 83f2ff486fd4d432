import os
import tempfile
from datetime import timedelta
from decimal import Decimal

# point the app at a throwaway database before anything imports app.db
_tmpdir = tempfile.mkdtemp(prefix="yonutri-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["STATIC_DIR"] = os.path.join(_tmpdir, "public")
os.environ["RESET_DB"] = "false"

import pytest

from app.db import SessionLocal, init_db
from app.models.coupon import Coupon
from app.models.product import Product, ProductVariant
from app.services.pricing import utcnow


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def count_rows():
    def _count(model) -> int:
        with SessionLocal() as s:
            return s.query(model).count()

    return _count


@pytest.fixture
def catalog():
    """
    Seed a small catalogue and coupon table. Returns the variant ids by name.

    WHEY 500g 25.00, WHEY 1000g 45.00 (compare 49.00, own image),
    OATS 1000g 4.50, OLD 250g 3.00 (archived product).
    """
    now = utcnow()
    with SessionLocal() as s:
        whey = Product(sku="WHEY", name="Whey Protein", description="Whey", image_url="whey.jpg", status="active")
        oats = Product(sku="OATS", name="Rolled Oats", image_url="oats.jpg", status="active")
        old = Product(sku="OLD", name="Old Stock", image_url="old.jpg", status="archived")
        empty = Product(sku="EMPTY", name="No Variants", status="active")
        s.add_all([whey, oats, old, empty])
        s.flush()

        whey_500 = ProductVariant(product_id=whey.id, label="500g", grams=500, price=Decimal("25.00"))
        # inserted before the 500g row: listing must still sort by grams
        whey_1000 = ProductVariant(
            product_id=whey.id,
            label="1kg",
            grams=1000,
            price=Decimal("45.00"),
            compare_at_price=Decimal("49.00"),
            image_url="whey-1kg.jpg",
        )
        oats_1000 = ProductVariant(product_id=oats.id, label="1kg", grams=1000, price=Decimal("4.50"))
        old_250 = ProductVariant(product_id=old.id, label="250g", grams=250, price=Decimal("3.00"))
        s.add(whey_1000)
        s.flush()
        s.add_all([whey_500, oats_1000, old_250])
        s.flush()

        s.add_all(
            [
                Coupon(code="SAVE10", discount_type="percent", value=Decimal("10"), min_subtotal=Decimal("0"), is_active=True),
                Coupon(code="BIG10", discount_type="percent", value=Decimal("10"), min_subtotal=Decimal("100"), is_active=True),
                Coupon(code="FIXED30", discount_type="fixed", value=Decimal("30"), min_subtotal=Decimal("0"), is_active=True),
                Coupon(
                    code="EXPIRED",
                    discount_type="percent",
                    value=Decimal("50"),
                    min_subtotal=Decimal("0"),
                    is_active=True,
                    expires_at=now - timedelta(days=1),
                ),
                Coupon(
                    code="TOMORROW",
                    discount_type="percent",
                    value=Decimal("20"),
                    min_subtotal=Decimal("0"),
                    is_active=True,
                    expires_at=now + timedelta(days=1),
                ),
                Coupon(code="OFF", discount_type="percent", value=Decimal("10"), min_subtotal=Decimal("0"), is_active=False),
            ]
        )
        ids = {
            "whey_500": whey_500.id,
            "whey_1000": whey_1000.id,
            "oats_1000": oats_1000.id,
            "old_250": old_250.id,
        }
        s.commit()
    return ids
