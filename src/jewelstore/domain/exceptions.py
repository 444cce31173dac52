"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display user-friendly
messages.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class LineViolation:
    """One rejected line of a cart (missing product or not enough stock)."""

    product_id: str
    name: str
    reason: str
    requested: int
    available: int | None = None

    def __str__(self) -> str:
        if self.available is None:
            return f"Product {self.name} not found"
        return (
            f"Insufficient stock for {self.name}. "
            f"Available: {self.available}"
        )


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    def __init__(
        self, message: str, violations: list[LineViolation] | None = None
    ) -> None:
        super().__init__(message)
        self.violations = list(violations or [])


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: '{product_id}'")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__("Order not found")
        self.order_id = order_id


class InsufficientStockError(DomainException):
    """A reservation asked for more units than the product has in stock."""

    def __init__(
        self, product_id: str, requested: int, available: int, name: str | None = None
    ) -> None:
        label = name or product_id
        super().__init__(
            f"Insufficient stock for {label}. Available: {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidTransitionError(DomainException):
    """The order cannot move from its current status to the requested one."""

    def __init__(self, order_id: str, current: str, target: str) -> None:
        if target == "cancelled" and current == "completed":
            message = "Cannot cancel completed order"
        else:
            message = f"Cannot change order status from {current} to {target}"
        super().__init__(message)
        self.order_id = order_id
        self.current = current
        self.target = target


class DuplicateIdempotencyKeyError(DomainException):
    """The order store already holds an order with this idempotency key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"An order with idempotency key '{key}' already exists")
        self.key = key
