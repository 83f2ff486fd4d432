# backend/app/schemas/checkout_schema.py
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic_core import PydanticCustomError


MAX_QTY = 10000

# ids and weights are JSON numbers; a fractional one just matches no variant
Number = Union[int, Annotated[float, Field(allow_inf_nan=False)]]


def coerce_qty(value: Any) -> int:
    """Quantity as an int >= 1; anything missing or non-numeric counts as 1."""
    try:
        qty = int(float(value)) if value else 1
    except (TypeError, ValueError, OverflowError):
        qty = 1
    if qty > MAX_QTY:
        raise PydanticCustomError("invalid_line_item", "Invalid cart item")
    return max(1, qty)


class _LineItemBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    qty: int = 1

    @field_validator("qty", mode="before")
    @classmethod
    def _qty(cls, v):
        return coerce_qty(v)


class ByVariantId(_LineItemBase):
    variant_id: Number = Field(alias="variantId")


class BySkuAndWeight(_LineItemBase):
    product_sku: str = Field("", alias="productSku")
    grams: Optional[Number] = None

    @field_validator("product_sku", mode="before")
    @classmethod
    def _sku(cls, v):
        return "" if v is None else str(v)


def _line_item_kind(v: Any) -> Optional[str]:
    if isinstance(v, dict):
        return "variant" if v.get("variantId") else "sku"
    if isinstance(v, ByVariantId):
        return "variant"
    if isinstance(v, BySkuAndWeight):
        return "sku"
    return None


LineItem = Annotated[
    Union[
        Annotated[ByVariantId, Tag("variant")],
        Annotated[BySkuAndWeight, Tag("sku")],
    ],
    Discriminator(
        _line_item_kind,
        custom_error_type="invalid_line_item",
        custom_error_message="Invalid cart item",
    ),
]


class CheckoutIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = ""
    phone: str = ""
    items: List[LineItem] = Field(default=None, validate_default=True)
    coupon_code: str = Field("", alias="couponCode")
    session_id: str = Field("", alias="sessionId")

    @field_validator("email", "phone", "coupon_code", "session_id", mode="before")
    @classmethod
    def _blank_if_null(cls, v):
        return "" if v is None else v

    @field_validator("items", mode="before")
    @classmethod
    def _non_empty_cart(cls, v):
        if not isinstance(v, list) or not v:
            raise PydanticCustomError("cart_empty", "Cart is empty")
        return v
