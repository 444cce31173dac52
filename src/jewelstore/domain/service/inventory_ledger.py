"""Domain service: Inventory Ledger.

The ledger is the only writer of ``Product.stock`` on behalf of orders.
Every adjustment is delegated to one atomic conditional update in the
product store, so concurrent checkouts of the same product can never
oversell it.

Multi-line reservations are failure-atomic by compensation: if any line
cannot be reserved, the lines already reserved in the same call are
released again before the error propagates.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from jewelstore.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from jewelstore.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Reservation:
    """Stock claimed for one line of an order."""

    product_id: str
    quantity: int


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, product_id: str, quantity: int) -> int:
        """Take ``quantity`` units out of stock if that many are available.

        Returns the stock left afterwards.
        """
        _check_quantity(quantity)
        remaining = self._product_repo.decrement_stock(product_id, quantity)
        if remaining is not None:
            logger.debug(
                "Stock reserved",
                product_id=product_id,
                quantity=quantity,
                remaining=remaining,
            )
            return remaining

        # The conditional update matched nothing: find out why.
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        logger.info(
            "Stock reservation rejected",
            product_id=product_id,
            requested=quantity,
            available=product.stock,
        )
        raise InsufficientStockError(
            product_id, requested=quantity, available=product.stock, name=product.name
        )

    def release(self, product_id: str, quantity: int) -> int:
        """Put ``quantity`` units back into stock. Returns the new stock."""
        _check_quantity(quantity)
        stock = self._product_repo.increment_stock(product_id, quantity)
        if stock is None:
            raise ProductNotFoundError(product_id)
        logger.debug(
            "Stock released", product_id=product_id, quantity=quantity, stock=stock
        )
        return stock

    def reserve_all(self, lines: list[tuple[str, int]]) -> list[Reservation]:
        """Reserve every ``(product_id, quantity)`` line, or none of them."""
        reserved: list[Reservation] = []
        try:
            for product_id, quantity in lines:
                self.reserve(product_id, quantity)
                reserved.append(Reservation(product_id, quantity))
        except Exception:
            if reserved:
                logger.warning(
                    "Rolling back partial reservation",
                    reserved_lines=len(reserved),
                    requested_lines=len(lines),
                )
                self.release_all(reserved)
            raise
        return reserved

    def release_all(self, reservations: list[Reservation]) -> None:
        """Return every reservation to stock.

        A product deleted from the catalog in the meantime has nothing to
        return to; it is logged and skipped so the other lines still go back.
        """
        for reservation in reservations:
            try:
                self.release(reservation.product_id, reservation.quantity)
            except ProductNotFoundError:
                logger.warning(
                    "Skipping restock of deleted product",
                    product_id=reservation.product_id,
                    quantity=reservation.quantity,
                )


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Stock adjustment quantity must be a positive integer")
