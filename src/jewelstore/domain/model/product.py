"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
The order workflow only ever touches ``stock``, and only through the
inventory ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from jewelstore.domain.exceptions import ValidationError
from jewelstore.domain.model.value_objects import Money, Weight


class Category(Enum):
    RINGS = "rings"
    NECKLACES = "necklaces"
    EARRINGS = "earrings"
    BRACELETS = "bracelets"
    PENDANTS = "pendants"


class Metal(Enum):
    GOLD = "gold"
    SILVER = "silver"
    PLATINUM = "platinum"
    WHITE_GOLD = "white-gold"
    ROSE_GOLD = "rose-gold"


def parse_category(value: str | Category) -> Category:
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a valid category") from None


def parse_metal(value: str | Metal) -> Metal:
    if isinstance(value, Metal):
        return value
    try:
        return Metal(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a valid metal") from None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A piece of jewelry in the catalog.

    Use ``Product.create()`` for new products. The ``__init__`` stays
    simple so repositories can reconstitute stored products.
    """

    id: str | None
    name: str
    category: Category
    metal: Metal
    weight: Weight
    price: Money
    stock: int = 0
    description: str = ""
    image: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @staticmethod
    def create(
        name: str,
        category: str | Category,
        metal: str | Metal,
        weight: Weight,
        price: Money,
        stock: int = 0,
        description: str = "",
        image: str = "",
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_stock(stock)
        return Product(
            id=None,
            name=name.strip(),
            category=parse_category(category),
            metal=parse_metal(metal),
            weight=weight,
            price=price,
            stock=stock,
            description=(description or "").strip(),
            image=(image or "").strip(),
        )

    def update_details(
        self,
        name: str | None = None,
        category: str | Category | None = None,
        metal: str | Metal | None = None,
        weight: Weight | None = None,
        price: Money | None = None,
        description: str | None = None,
        image: str | None = None,
    ) -> None:
        """Change catalog attributes.

        This does NOT affect any existing orders because orders
        capture a snapshot at creation time.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if category is not None:
            self.category = parse_category(category)
        if metal is not None:
            self.metal = parse_metal(metal)
        if weight is not None:
            self.weight = weight
        if price is not None:
            self.price = price
        if description is not None:
            self.description = description.strip()
        if image is not None:
            self.image = image.strip()
        self.updated_at = _utcnow()

    def set_stock(self, stock: int) -> None:
        """Catalog-management restock. Never used by the order workflow."""
        _check_stock(stock)
        self.stock = stock
        self.updated_at = _utcnow()


def _check_stock(stock: int) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError("Stock must be a whole number")
    if stock < 0:
        raise ValidationError("Stock cannot be negative")
