"""Application service: Update Product use case.

Only the fields the caller sent are written. Checkouts keep decrementing
stock while a product is being edited, so stock is never written back
from the copy read here; an explicit new stock level is set on its own.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from jewelstore.domain.exceptions import ProductNotFoundError
from jewelstore.domain.model.product import Product
from jewelstore.domain.model.value_objects import Money, Weight
from jewelstore.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        metal: str | None = None,
        weight: str | float | Decimal | None = None,
        price: str | float | Decimal | None = None,
        stock: int | None = None,
        description: str | None = None,
        image: str | None = None,
    ) -> Product:
        """Update catalog fields of a product.

        This does NOT affect any existing orders, which captured a
        snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        sent = {
            "name": name,
            "category": category,
            "metal": metal,
            "weight": Weight.of(weight) if weight is not None else None,
            "price": Money.of(price) if price is not None else None,
            "description": description,
            "image": image,
        }
        # Validate everything on the copy before writing anything.
        product.update_details(**sent)
        if stock is not None:
            product.set_stock(stock)
            if self._product_repo.set_stock(product_id, stock) is None:
                raise ProductNotFoundError(product_id)

        fields = [field for field, value in sent.items() if value is not None]
        updated = self._product_repo.update_details(product, fields)
        if updated is None:
            raise ProductNotFoundError(product_id)
        logger.info(
            "Product updated",
            product_id=product_id,
            fields=fields + (["stock"] if stock is not None else []),
        )
        return updated
