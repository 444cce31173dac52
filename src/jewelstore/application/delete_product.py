"""Application service: Delete Product use case.

Orders that reference the product keep their line-item snapshot.
"""

from __future__ import annotations

import structlog

from jewelstore.domain.exceptions import ProductNotFoundError
from jewelstore.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info("Product deleted", product_id=product_id)
