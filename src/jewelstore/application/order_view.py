"""Mapping from Order aggregates to DTOs, enriched with catalog data."""

from __future__ import annotations

from jewelstore.application.dto import (
    CustomerDTO,
    OrderDTO,
    OrderLineItemDTO,
    ProductSummaryDTO,
)
from jewelstore.domain.model.order import Order
from jewelstore.domain.model.product import Product
from jewelstore.domain.repository.product_repository import ProductRepository


class OrderView:
    """Builds OrderDTOs, resolving each product reference at most once."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._cache: dict[str, Product | None] = {}

    def one(self, order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer=CustomerDTO(
                name=order.customer.name,
                email=order.customer.email,
                phone=order.customer.phone,
                address=order.customer.address,
            ),
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    name=item.name,
                    price=item.price.amount,
                    quantity=item.quantity.value,
                    metal=item.metal.value if item.metal else None,
                    weight=item.weight.grams if item.weight else None,
                    line_total=item.line_total.amount,
                    product=self._summary(item.product_id),
                )
                for item in order.items
            ],
            total=order.total.amount,
            status=order.status.value,
            idempotency_key=order.idempotency_key,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def many(self, orders: list[Order]) -> list[OrderDTO]:
        return [self.one(order) for order in orders]

    def _summary(self, product_id: str) -> ProductSummaryDTO | None:
        if product_id not in self._cache:
            self._cache[product_id] = self._product_repo.get_by_id(product_id)
        product = self._cache[product_id]
        if product is None:
            return None
        return ProductSummaryDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            category=product.category.value,
            metal=product.metal.value,
        )
