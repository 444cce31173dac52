"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from jewelstore.domain.model.product import Category, Metal, Product
from jewelstore.domain.model.value_objects import Money, Weight
from jewelstore.domain.repository.product_repository import ProductRepository
from jewelstore.infrastructure.persistence.json_file_store import JsonFileStore


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._store.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(
        self,
        category: Category | None = None,
        metal: Metal | None = None,
    ) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._store.read()
            if (category is None or raw["category"] == category.value)
            and (metal is None or raw["metal"] == metal.value)
        ]

    def save(self, product: Product) -> None:
        with self._store.transaction() as records:
            if product.id is None:
                product.id = uuid.uuid4().hex
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    del records[i]
                    return True
        return False

    def update_details(self, product: Product, fields: list[str]) -> Product | None:
        if "stock" in fields:
            raise ValueError("stock is changed through set_stock, not update_details")
        changed = self._to_raw(product)
        with self._store.transaction() as records:
            for raw in records:
                if raw["id"] != product.id:
                    continue
                for name in fields:
                    raw[name] = changed[name]
                    if name == "price":
                        raw["currency"] = changed["currency"]
                raw["updated_at"] = changed["updated_at"]
                return self._to_domain(raw)
        return None

    def set_stock(self, product_id: str, stock: int) -> int | None:
        with self._store.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] = stock
                    raw["updated_at"] = _now_iso()
                    return raw["stock"]
        return None

    def decrement_stock(self, product_id: str, quantity: int) -> int | None:
        with self._store.transaction() as records:
            for raw in records:
                if raw["id"] == product_id and raw["stock"] >= quantity:
                    raw["stock"] -= quantity
                    raw["updated_at"] = _now_iso()
                    return raw["stock"]
        return None

    def increment_stock(self, product_id: str, quantity: int) -> int | None:
        with self._store.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] += quantity
                    raw["updated_at"] = _now_iso()
                    return raw["stock"]
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category.value,
            "metal": product.metal.value,
            "weight": str(product.weight.grams),
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "description": product.description,
            "image": product.image,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=Category(raw["category"]),
            metal=Metal(raw["metal"]),
            weight=Weight(Decimal(raw["weight"])),
            price=Money(Decimal(raw["price"]), raw.get("currency", "INR")),
            stock=raw["stock"],
            description=raw.get("description", ""),
            image=raw.get("image", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
