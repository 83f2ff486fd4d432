from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text

from app.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=True)
    status = Column(String(32), nullable=False, default="active")  # active, draft, archived

    def __repr__(self):
        return f"<Product sku={self.sku} name={self.name}>"


class ProductVariant(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    label = Column(String(64), nullable=True)
    grams = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    compare_at_price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String(512), nullable=True)

    def __repr__(self):
        return f"<ProductVariant id={self.id} grams={self.grams} price={self.price}>"
