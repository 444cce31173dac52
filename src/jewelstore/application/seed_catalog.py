"""Application service: Seed Catalog use case.

Loads a handful of sample pieces into an empty catalog so a fresh
install has something to browse and order.
"""

from __future__ import annotations

from jewelstore.application.add_product import AddProductHandler
from jewelstore.domain.repository.product_repository import ProductRepository

SAMPLE_PRODUCTS = [
    {
        "name": "Diamond Solitaire Ring",
        "category": "rings",
        "metal": "platinum",
        "weight": "5.5",
        "price": "45000",
        "stock": 8,
        "description": "Classic solitaire with 1ct diamond",
    },
    {
        "name": "Gold Chain Necklace",
        "category": "necklaces",
        "metal": "gold",
        "weight": "15.2",
        "price": "38000",
        "stock": 12,
        "description": "22K gold chain with intricate design",
    },
    {
        "name": "Pearl Earrings",
        "category": "earrings",
        "metal": "silver",
        "weight": "3.2",
        "price": "12000",
        "stock": 15,
        "description": "Elegant pearl drop earrings",
    },
    {
        "name": "Gold Bangle Bracelet",
        "category": "bracelets",
        "metal": "gold",
        "weight": "25.5",
        "price": "52000",
        "stock": 6,
        "description": "Traditional gold bangle with intricate patterns",
    },
    {
        "name": "Diamond Pendant",
        "category": "pendants",
        "metal": "white-gold",
        "weight": "4.2",
        "price": "28000",
        "stock": 10,
        "description": "Elegant diamond pendant in white gold",
    },
]


class SeedCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> int:
        """Insert the samples if the catalog is empty. Returns how many were added."""
        if self._product_repo.list_all():
            return 0
        add = AddProductHandler(self._product_repo)
        for sample in SAMPLE_PRODUCTS:
            add.handle(**sample)
        return len(SAMPLE_PRODUCTS)
