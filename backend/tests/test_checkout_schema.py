import pytest
from pydantic import ValidationError

from app.schemas.checkout_schema import MAX_QTY, BySkuAndWeight, ByVariantId, CheckoutIn, coerce_qty


def test_items_dispatch_by_shape():
    req = CheckoutIn.model_validate(
        {
            "email": "a@b.co",
            "items": [
                {"variantId": 3, "qty": 2},
                {"productSku": "WHEY", "grams": "500", "qty": 1},
            ],
            "couponCode": "SAVE10",
            "sessionId": "s-1",
        }
    )
    by_id, by_sku = req.items
    assert isinstance(by_id, ByVariantId) and by_id.variant_id == 3 and by_id.qty == 2
    assert isinstance(by_sku, BySkuAndWeight)
    assert (by_sku.product_sku, by_sku.grams, by_sku.qty) == ("WHEY", 500, 1)
    assert req.coupon_code == "SAVE10"
    assert req.session_id == "s-1"


def test_falsy_variant_id_falls_back_to_sku_lookup():
    req = CheckoutIn.model_validate({"items": [{"variantId": 0, "productSku": "OATS", "grams": 1000}]})
    assert isinstance(req.items[0], BySkuAndWeight)


def test_optional_fields_default_to_blank():
    req = CheckoutIn.model_validate({"email": None, "items": [{"variantId": 1}]})
    assert req.email == ""
    assert req.phone == ""
    assert req.coupon_code == ""
    assert req.session_id == ""
    assert req.items[0].qty == 1


@pytest.mark.parametrize(
    "raw, qty",
    [(None, 1), (0, 1), (-2, 1), ("3", 3), (2.7, 2), ("abc", 1), ([], 1), (5, 5)],
)
def test_coerce_qty(raw, qty):
    assert coerce_qty(raw) == qty


@pytest.mark.parametrize("body", [{}, {"items": []}, {"items": "nope"}, {"items": None}, {"items": {"variantId": 1}}])
def test_empty_cart_is_rejected(body):
    with pytest.raises(ValidationError) as exc:
        CheckoutIn.model_validate(body)
    err = exc.value.errors()[0]
    assert err["type"] == "cart_empty"
    assert err["msg"] == "Cart is empty"


def test_non_object_item_is_rejected():
    with pytest.raises(ValidationError) as exc:
        CheckoutIn.model_validate({"items": ["WHEY"]})
    assert exc.value.errors()[0]["type"] == "invalid_line_item"


def test_numeric_ids_and_weights_keep_their_value():
    req = CheckoutIn.model_validate(
        {"items": [{"variantId": 1.5}, {"productSku": "WHEY", "grams": 500.5}, {"productSku": "WHEY", "grams": 500}]}
    )
    assert req.items[0].variant_id == 1.5
    assert req.items[1].grams == 500.5
    assert req.items[2].grams == 500 and isinstance(req.items[2].grams, int)


def test_quantity_above_limit_is_rejected():
    assert coerce_qty(MAX_QTY) == MAX_QTY
    with pytest.raises(ValidationError) as exc:
        CheckoutIn.model_validate({"items": [{"variantId": 1, "qty": MAX_QTY + 1}]})
    assert exc.value.errors()[0]["type"] == "invalid_line_item"
