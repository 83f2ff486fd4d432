from typing import Dict, List

from sqlalchemy.orm import Session

from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductOut, VariantOut


class CatalogueService:
    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)

    def list_products(self) -> List[ProductOut]:
        """
        Active products, each with its variants (lightest first).
        A product's image is the resolved image of its first variant row.
        """
        products: Dict[int, ProductOut] = {}
        for p, v, img in self.product_repo.list_active_with_variants():
            if p.id not in products:
                products[p.id] = ProductOut(
                    id=p.id,
                    sku=p.sku,
                    name=p.name,
                    description=p.description,
                    image_url=img,
                    variants=[],
                )
            products[p.id].variants.append(
                VariantOut(
                    id=v.id,
                    label=v.label,
                    grams=v.grams,
                    price=float(v.price),
                    compare=None if v.compare_at_price is None else float(v.compare_at_price),
                    image=img,
                )
            )
        return list(products.values())
