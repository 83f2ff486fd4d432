from typing import List, Optional, Tuple

from app.models.product import Product, ProductVariant
from sqlalchemy import func, select
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_active_with_variants(self) -> List[Tuple[Product, ProductVariant, Optional[str]]]:
        """
        Return (product, variant, image) rows for every variant of an active product,
        ordered by product id then grams. `image` is the variant image falling back
        to the product image.
        """
        stmt = (
            select(
                Product,
                ProductVariant,
                func.coalesce(ProductVariant.image_url, Product.image_url).label("img"),
            )
            .join(ProductVariant, ProductVariant.product_id == Product.id)
            .where(Product.status == "active")
            .order_by(Product.id, ProductVariant.grams)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def get_variant(self, variant_id) -> Optional[ProductVariant]:
        stmt = select(ProductVariant).where(ProductVariant.id == variant_id)
        return self.db.execute(stmt).scalars().first()

    def find_variant(self, sku: str, grams) -> Optional[ProductVariant]:
        """Variant of product `sku` weighing exactly `grams`; first match wins."""
        stmt = (
            select(ProductVariant)
            .join(Product, Product.id == ProductVariant.product_id)
            .where(Product.sku == sku, ProductVariant.grams == grams)
            .order_by(ProductVariant.id)
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def create_or_update(
        self,
        sku: str,
        name: str,
        description: str = None,
        image_url: str = None,
        status: str = "active",
    ) -> Product:
        p = self.db.query(Product).filter(Product.sku == sku).first()
        if p:
            p.name = name
            p.description = description
            p.image_url = image_url
            p.status = status
        else:
            p = Product(
                sku=sku,
                name=name,
                description=description,
                image_url=image_url,
                status=status,
            )
            self.db.add(p)
        self.db.flush()
        return p

    def upsert_variant(
        self,
        product: Product,
        grams: int,
        price,
        label: str = None,
        compare_at_price=None,
        image_url: str = None,
    ) -> ProductVariant:
        v = (
            self.db.query(ProductVariant)
            .filter(ProductVariant.product_id == product.id, ProductVariant.grams == grams)
            .first()
        )
        if v is None:
            v = ProductVariant(product_id=product.id, grams=grams)
            self.db.add(v)
        v.label = label
        v.price = price
        v.compare_at_price = compare_at_price
        v.image_url = image_url
        self.db.flush()
        return v
