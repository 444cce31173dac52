"""Application service: List Products use case (query)."""

from __future__ import annotations

from jewelstore.domain.exceptions import ProductNotFoundError
from jewelstore.domain.model.product import Product, parse_category, parse_metal
from jewelstore.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        category: str | None = None,
        metal: str | None = None,
        search: str | None = None,
    ) -> list[Product]:
        """Catalog products, filtered by category/metal and a free-text term.

        The term matches name or description, case-insensitively.
        """
        products = self._product_repo.list_all(
            category=parse_category(category) if category else None,
            metal=parse_metal(metal) if metal else None,
        )
        term = (search or "").strip().lower()
        if term:
            products = [
                p for p in products
                if term in p.name.lower() or term in p.description.lower()
            ]
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def get(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
