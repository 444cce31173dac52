"""Application service: Show Order use case (query)."""

from __future__ import annotations

from jewelstore.application.dto import OrderDTO
from jewelstore.application.order_view import OrderView
from jewelstore.domain.exceptions import OrderNotFoundError
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderView(self._product_repo).one(order)
