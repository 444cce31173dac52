"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jewelstore.domain.exceptions import DuplicateIdempotencyKeyError
from jewelstore.domain.model.order import Customer, Order, OrderLineItem, OrderStatus
from jewelstore.domain.model.product import Metal
from jewelstore.domain.model.value_objects import Money, Quantity, Weight
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.infrastructure.persistence.json_file_store import JsonFileStore


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._store.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_idempotency_key(self, key: str) -> Order | None:
        for raw in self._store.read():
            if raw.get("idempotency_key") == key:
                return self._to_domain(raw)
        return None

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._store.read()
            if status is None or raw["status"] == status.value
        ]

    def add(self, order: Order) -> None:
        with self._store.transaction() as orders:
            key = order.idempotency_key
            # Unique (sparse) index on idempotency_key
            if key is not None and any(o.get("idempotency_key") == key for o in orders):
                raise DuplicateIdempotencyKeyError(key)
            if order.id is None:
                order.id = uuid.uuid4().hex
            orders.append(self._to_raw(order))

    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._store.transaction() as orders:
            for raw in orders:
                if raw["id"] != order.id:
                    continue
                if raw["status"] != expected.value:
                    return False
                raw["status"] = order.status.value
                raw["updated_at"] = order.updated_at.isoformat()
                return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "idempotency_key": order.idempotency_key,
            "customer": {
                "name": order.customer.name,
                "email": order.customer.email,
                "phone": order.customer.phone,
                "address": order.customer.address,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                    "quantity": item.quantity.value,
                    "metal": item.metal.value if item.metal else None,
                    "weight": str(item.weight.grams) if item.weight else None,
                }
                for item in order.items
            ],
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                name=i["name"],
                price=Money(Decimal(i["price"]), i.get("currency", "INR")),
                quantity=Quantity(i["quantity"]),
                metal=Metal(i["metal"]) if i.get("metal") else None,
                weight=Weight(Decimal(i["weight"])) if i.get("weight") else None,
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer=Customer(**raw["customer"]),
            items=items,
            total=Money(Decimal(raw["total"]), raw.get("currency", "INR")),
            status=OrderStatus(raw["status"]),
            idempotency_key=raw.get("idempotency_key"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
