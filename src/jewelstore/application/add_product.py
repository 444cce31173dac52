"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

import structlog

from jewelstore.domain.model.product import Product
from jewelstore.domain.model.value_objects import Money, Weight
from jewelstore.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        category: str,
        metal: str,
        weight: str | float | Decimal,
        price: str | float | Decimal,
        stock: int = 0,
        description: str = "",
        image: str = "",
    ) -> Product:
        """Add a new piece to the catalog."""
        product = Product.create(
            name=name,
            category=category,
            metal=metal,
            weight=Weight.of(weight),
            price=Money.of(price),
            stock=stock,
            description=description,
            image=image,
        )
        self._product_repo.save(product)
        logger.info("Product added", product_id=product.id, stock=product.stock)
        return product
