# backend/app/schemas/product_schema.py
from typing import List, Optional
from pydantic import BaseModel


class VariantOut(BaseModel):
    id: int
    label: Optional[str] = None
    grams: int
    price: float
    compare: Optional[float] = None
    image: Optional[str] = None


class ProductOut(BaseModel):
    id: int
    sku: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    variants: List[VariantOut] = []
