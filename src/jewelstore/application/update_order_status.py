"""Application service: Update Order Status use case.

Moves an order between pending, processing and completed without any
stock side effects. A request for ``cancelled`` is handed to the cancel
use case so the order's stock is returned exactly once.
"""

from __future__ import annotations

import structlog

from jewelstore.application.cancel_order import CancelOrderHandler
from jewelstore.application.dto import OrderDTO
from jewelstore.application.order_view import OrderView
from jewelstore.domain.exceptions import OrderNotFoundError
from jewelstore.domain.model.order import OrderStatus, parse_status
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str, status: str) -> OrderDTO:
        if self._order_repo.get_by_id(order_id) is None:
            raise OrderNotFoundError(order_id)
        target = parse_status(status)

        if target == OrderStatus.CANCELLED:
            return CancelOrderHandler(self._order_repo, self._product_repo).handle(
                order_id
            )

        while True:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            previous = order.status
            order.change_status(target)
            if self._order_repo.transition_status(order, expected=previous):
                break

        logger.info(
            "Order status updated",
            order_id=order_id,
            previous_status=previous.value,
            status=target.value,
        )
        return OrderView(self._product_repo).one(order)
