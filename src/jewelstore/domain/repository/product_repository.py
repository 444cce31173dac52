"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the tests.

``decrement_stock`` and ``increment_stock`` are the only stock mutations
the order workflow may use. Each must be a single atomic operation in the
backing store, never a read followed by a separate write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelstore.domain.model.product import Category, Metal, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        category: Category | None = None,
        metal: Metal | None = None,
    ) -> list[Product]:
        """Return catalog products, optionally filtered."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a whole product record, assigning an ID to new ones.

        Only for records nobody else is writing yet; edits to a live
        product go through ``update_details`` and ``set_stock``.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Returns False when it did not exist."""

    @abstractmethod
    def update_details(self, product: Product, fields: list[str]) -> Product | None:
        """Copy only ``fields`` (never ``stock``) from ``product`` onto the
        stored record, in one atomic step.

        Returns the stored product afterwards, or None if it is gone.
        """

    @abstractmethod
    def set_stock(self, product_id: str, stock: int) -> int | None:
        """Overwrite stock with an absolute value. Returns it, or None if missing."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> int | None:
        """Subtract ``quantity`` only if stock >= quantity.

        Returns the new stock, or None when no product matched the
        condition (missing product or not enough stock).
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> int | None:
        """Add ``quantity`` to stock. Returns the new stock, or None if missing."""
