"""Application service: Order Statistics use case (query)."""

from __future__ import annotations

from decimal import Decimal

from jewelstore.application.dto import OrderStatsDTO, StatusBreakdownDTO
from jewelstore.domain.model.order import OrderStatus
from jewelstore.domain.repository.order_repository import OrderRepository


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> OrderStatsDTO:
        counts: dict[OrderStatus, int] = {}
        revenue: dict[OrderStatus, Decimal] = {}
        orders = self._order_repo.list_all()

        for order in orders:
            counts[order.status] = counts.get(order.status, 0) + 1
            revenue[order.status] = (
                revenue.get(order.status, Decimal("0")) + order.total.amount
            )

        # Only statuses that actually occur, in lifecycle order.
        breakdown = [
            StatusBreakdownDTO(
                status=status.value,
                count=counts[status],
                total_revenue=revenue[status],
            )
            for status in OrderStatus
            if status in counts
        ]
        return OrderStatsDTO(
            status_breakdown=breakdown,
            total_orders=len(orders),
            total_revenue=sum(
                (amount for status, amount in revenue.items()
                 if status != OrderStatus.CANCELLED),
                Decimal("0"),
            ),
        )
