#!/usr/bin/env python3
"""
Seed products, their weight variants and coupons from a JSON file
(scripts/catalogue.sample.json by default).

The file is either a list of products or an object with "products" and an
optional "coupons" list:

    {"products": [{"sku": "WHEY", "name": "Whey", "variants": [{"grams": 500, "price": "25.00"}]}],
     "coupons": [{"code": "SAVE10", "discount_type": "percent", "value": 10}]}

Usage:
    python scripts/seed_products.py --file scripts/catalogue.sample.json
"""
import argparse
import json
import os
import sys
from datetime import datetime
from decimal import Decimal

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.db import SessionLocal, init_db
from app.models.coupon import Coupon
from app.repositories.product_repo import ProductRepository
from app.utils.transactions import unit_of_work

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "catalogue.sample.json")


def _money(value):
    return None if value in (None, "") else Decimal(str(value))


def _load(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, list):
        return data, []
    return data.get("products", []), data.get("coupons", [])


def seed_from_file(path: str):
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    products, coupons = _load(path)

    init_db()
    db = SessionLocal()
    repo = ProductRepository(db)
    n_variants = 0
    try:
        with unit_of_work(db):
            for entry in products:
                sku = entry.get("sku")
                if not sku:
                    continue
                p = repo.create_or_update(
                    sku=sku,
                    name=entry.get("name", "") or "",
                    description=entry.get("description", "") or "",
                    image_url=entry.get("image_url") or entry.get("image"),
                    status=entry.get("status", "active"),
                )
                for v in entry.get("variants", []):
                    repo.upsert_variant(
                        p,
                        grams=int(v["grams"]),
                        price=_money(v.get("price")) or Decimal("0"),
                        label=v.get("label") or f"{v['grams']}g",
                        compare_at_price=_money(v.get("compare_at_price")),
                        image_url=v.get("image_url"),
                    )
                    n_variants += 1
            for c in coupons:
                expires = c.get("expires_at")
                db.merge(
                    Coupon(
                        code=c["code"],
                        discount_type=c.get("discount_type", "percent"),
                        value=_money(c.get("value")) or Decimal("0"),
                        min_subtotal=_money(c.get("min_subtotal")) or Decimal("0"),
                        is_active=bool(c.get("is_active", True)),
                        expires_at=datetime.fromisoformat(expires) if expires else None,
                    )
                )
        print(f"Seeded {len(products)} products, {n_variants} variants, {len(coupons)} coupons")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=DEFAULT_SOURCE, help="Path to catalogue json")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
