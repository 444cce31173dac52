"""Application service: Place Order (checkout) use case.

Turns a submitted cart into a pending order:

1. An idempotency key that already belongs to an order short-circuits
   everything and returns that order.
2. Every line is checked against the catalog and all problems are
   reported together. Nothing is mutated if any line is invalid.
3. Stock for all lines is reserved through the inventory ledger, all or
   nothing.
4. The order is persisted. If another request with the same key won the
   race, our reservations are returned and the winner's order is used.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from jewelstore.application.dto import (
    CustomerSpec,
    OrderItemSpec,
    PlacementResult,
)
from jewelstore.application.order_view import OrderView
from jewelstore.domain.exceptions import (
    DuplicateIdempotencyKeyError,
    LineViolation,
    ValidationError,
)
from jewelstore.domain.model.order import Customer, Order, OrderLineItem
from jewelstore.domain.model.product import Product
from jewelstore.domain.model.value_objects import Money, Quantity
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository
from jewelstore.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        customer: CustomerSpec,
        item_specs: list[OrderItemSpec],
        total: str | int | float | Decimal | None = None,
        idempotency_key: str | None = None,
    ) -> PlacementResult:
        key = (idempotency_key or "").strip() or None

        if key is not None:
            existing = self._order_repo.get_by_idempotency_key(key)
            if existing is not None:
                logger.info(
                    "Duplicate checkout returned existing order",
                    order_id=existing.id,
                    idempotency_key=key,
                )
                return PlacementResult(self._view().one(existing), created=False)

        buyer = Customer.create(
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
        )
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        products = self._check_stock(item_specs)

        line_items = [
            OrderLineItem(
                product_id=spec.product_id,
                name=products[spec.product_id].name,
                price=products[spec.product_id].price,  # <-- price snapshot
                quantity=quantity,
                metal=products[spec.product_id].metal,
                weight=products[spec.product_id].weight,
            )
            for spec, quantity in zip(item_specs, quantities)
        ]
        order = Order.create(
            customer=buyer,
            items=line_items,
            total=Money.of(total) if total is not None else None,
            idempotency_key=key,
        )

        reservations = InventoryLedger(self._product_repo).reserve_all(
            [(item.product_id, item.quantity.value) for item in order.items]
        )

        try:
            self._order_repo.add(order)
        except DuplicateIdempotencyKeyError:
            InventoryLedger(self._product_repo).release_all(reservations)
            winner = self._order_repo.get_by_idempotency_key(key)  # type: ignore[arg-type]
            if winner is None:
                raise
            logger.info(
                "Concurrent checkout lost idempotency race",
                order_id=winner.id,
                idempotency_key=key,
            )
            return PlacementResult(self._view().one(winner), created=False)
        except Exception:
            InventoryLedger(self._product_repo).release_all(reservations)
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            lines=len(order.items),
            total=str(order.total.amount),
            idempotency_key=key,
        )
        return PlacementResult(self._view().one(order), created=True)

    # --- Validation -----------------------------------------------------------

    def _check_stock(self, item_specs: list[OrderItemSpec]) -> dict[str, Product]:
        """Load every product and make sure the whole cart fits in stock.

        Quantities for the same product on several lines are added up.
        """
        requested: dict[str, int] = {}
        labels: dict[str, str] = {}
        for spec in item_specs:
            requested[spec.product_id] = requested.get(spec.product_id, 0) + spec.quantity
            labels.setdefault(spec.product_id, spec.name or spec.product_id)

        products: dict[str, Product] = {}
        violations: list[LineViolation] = []
        for product_id, quantity in requested.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                violations.append(
                    LineViolation(
                        product_id=product_id,
                        name=labels[product_id],
                        reason="not_found",
                        requested=quantity,
                    )
                )
                continue
            if product.stock < quantity:
                violations.append(
                    LineViolation(
                        product_id=product_id,
                        name=product.name,
                        reason="insufficient_stock",
                        requested=quantity,
                        available=product.stock,
                    )
                )
                continue
            products[product_id] = product

        if violations:
            logger.info(
                "Checkout rejected",
                violations=[v.product_id for v in violations],
            )
            raise ValidationError(
                "; ".join(str(v) for v in violations), violations=violations
            )
        return products

    def _view(self) -> OrderView:
        return OrderView(self._product_repo)
