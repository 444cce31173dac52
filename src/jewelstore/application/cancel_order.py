"""Application service: Cancel Order use case.

Returns every line's quantity to stock and marks the order cancelled.
Completed orders cannot be cancelled; cancelling a cancelled order is a
no-op that still succeeds.

The status change is stored with a compare-and-set *before* the restock,
so two concurrent cancels of the same order restock it only once.
"""

from __future__ import annotations

import structlog

from jewelstore.application.dto import OrderDTO
from jewelstore.application.order_view import OrderView
from jewelstore.domain.exceptions import OrderNotFoundError
from jewelstore.domain.model.order import Order
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository
from jewelstore.domain.service.inventory_ledger import InventoryLedger, Reservation

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str) -> OrderDTO:
        while True:
            order = self._load(order_id)
            if order.is_cancelled:
                logger.debug("Order already cancelled", order_id=order_id)
                return OrderView(self._product_repo).one(order)

            previous = order.status
            order.cancel()  # raises for completed orders
            if self._order_repo.transition_status(order, expected=previous):
                break
            # Status changed underneath us; look again.

        InventoryLedger(self._product_repo).release_all(
            [Reservation(item.product_id, item.quantity.value) for item in order.items]
        )
        logger.info(
            "Order cancelled",
            order_id=order_id,
            previous_status=previous.value,
            restocked_lines=len(order.items),
        )
        return OrderView(self._product_repo).one(order)

    def _load(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order
