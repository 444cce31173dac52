"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelstore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_idempotency_key(self, key: str) -> Order | None:
        """Return the order created with this idempotency key, or None."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return every order, optionally only those in ``status``."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and assign its ID.

        Raises DuplicateIdempotencyKeyError if another order already
        carries the same idempotency key. The check and the insert are
        one atomic step.
        """

    @abstractmethod
    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        """Store ``order.status``/``order.updated_at`` if the stored status
        is still ``expected``. Returns False when another writer got there
        first.
        """
