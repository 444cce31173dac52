"""Order aggregate.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; the stock side of an order
(reservation and restock) is handled by the inventory ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from jewelstore.domain.exceptions import InvalidTransitionError, ValidationError
from jewelstore.domain.model.product import Metal
from jewelstore.domain.model.value_objects import (
    Money,
    Quantity,
    Weight,
    normalize_email,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def parse_status(value: str | OrderStatus) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a valid order status") from None


@dataclass(frozen=True)
class Customer:
    name: str
    email: str
    phone: str
    address: str

    @staticmethod
    def create(name: str, email: str, phone: str, address: str) -> Customer:
        """Trim every field, lower-case the email and reject blanks."""
        cleaned = {}
        for label, value in (("name", name), ("phone", phone), ("address", address)):
            value = (value or "").strip()
            if not value:
                raise ValidationError(f"Customer {label} is required")
            cleaned[label] = value
        return Customer(email=normalize_email(email), **cleaned)


@dataclass(frozen=True)
class OrderLineItem:
    """Snapshot of a product at order-creation time.

    Name, price, metal and weight are copied from the catalog and never
    change afterwards (price lock preserved).
    """

    product_id: str
    name: str
    price: Money  # locked at order-creation time
    quantity: Quantity
    metal: Metal | None = None
    weight: Weight | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    customer: Customer
    items: list[OrderLineItem]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    idempotency_key: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: Customer,
        items: list[OrderLineItem],
        total: Money | None = None,
        idempotency_key: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants.

        When ``total`` is given it must match the sum of the line items.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        computed = line_items_total(items)
        if total is not None and total != computed:
            raise ValidationError(
                f"Order total {total} does not match line items total {computed}"
            )

        return Order(
            id=None,
            customer=customer,
            items=list(items),
            total=computed,
            idempotency_key=idempotency_key or None,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, target: OrderStatus) -> None:
        """Move between pending, processing and completed freely.

        Cancellation has its own rules (``cancel``) and a cancelled
        order stays cancelled because its stock was already returned.
        """
        if target == OrderStatus.CANCELLED:
            raise ValidationError("Cancelled status is set through cancel()")
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError(
                str(self.id), self.status.value, target.value
            )
        self.status = target
        self.updated_at = _utcnow()

    def cancel(self) -> None:
        """Transition pending|processing -> cancelled.

        The caller stores the new status first and only then returns the
        order's stock through the inventory ledger, so it happens once.
        """
        if self.status == OrderStatus.COMPLETED:
            raise InvalidTransitionError(
                str(self.id), self.status.value, OrderStatus.CANCELLED.value
            )
        self.status = OrderStatus.CANCELLED
        self.updated_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED


def line_items_total(items: list[OrderLineItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result
