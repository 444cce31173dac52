"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CustomerSpec:
    """Input: who is placing the order."""

    name: str
    email: str
    phone: str
    address: str


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity).

    ``name`` is the client's own label for the product, only used to
    describe a line whose product no longer exists.
    """

    product_id: str
    quantity: int
    name: str | None = None


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Output: current catalog fields of the product behind a line item."""

    id: str
    name: str
    category: str
    metal: str


@dataclass(frozen=True)
class CustomerDTO:
    name: str
    email: str
    phone: str
    address: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as stored on the order."""

    product_id: str
    name: str
    price: Decimal
    quantity: int
    metal: str | None
    weight: Decimal | None
    line_total: Decimal
    product: ProductSummaryDTO | None  # None once the product is deleted


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer: CustomerDTO
    items: list[OrderLineItemDTO]
    total: Decimal
    status: str
    idempotency_key: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PlacementResult:
    """Output of checkout: the order, and whether this call created it."""

    order: OrderDTO
    created: bool


@dataclass(frozen=True)
class StatusBreakdownDTO:
    status: str
    count: int
    total_revenue: Decimal


@dataclass(frozen=True)
class OrderStatsDTO:
    status_breakdown: list[StatusBreakdownDTO]
    total_orders: int
    total_revenue: Decimal  # cancelled orders excluded
