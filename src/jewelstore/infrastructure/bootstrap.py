"""Composition root: builds the JSON repositories from the settings.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from jewelstore.infrastructure.config import Settings, load_settings
from jewelstore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from jewelstore.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or load_settings()
    return JsonProductRepository(settings.products_file)


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or load_settings()
    return JsonOrderRepository(settings.orders_file)
