"""Application service: List Orders use case (query)."""

from __future__ import annotations

from jewelstore.application.dto import OrderDTO
from jewelstore.application.order_view import OrderView
from jewelstore.domain.exceptions import ValidationError
from jewelstore.domain.model.order import Order, parse_status
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository

# Accepts both the snake_case names and the camelCase ones web clients send.
SORT_FIELDS = {
    "created_at": lambda o: o.created_at,
    "createdAt": lambda o: o.created_at,
    "updated_at": lambda o: o.updated_at,
    "updatedAt": lambda o: o.updated_at,
    "total": lambda o: o.total.amount,
    "status": lambda o: o.status.value,
}


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        status: str | None = None,
        sort_by: str = "created_at",
        direction: str = "desc",
    ) -> list[OrderDTO]:
        """Return orders, newest first unless told otherwise."""
        key = SORT_FIELDS.get(sort_by)
        if key is None:
            raise ValidationError(f"Cannot sort orders by '{sort_by}'")
        if direction not in ("asc", "desc"):
            raise ValidationError(f"Sort order must be 'asc' or 'desc', got '{direction}'")

        orders: list[Order] = self._order_repo.list_all(
            status=parse_status(status) if status else None
        )
        orders.sort(key=key, reverse=direction == "desc")
        return OrderView(self._product_repo).many(orders)
