"""Pydantic request schemas for the HTTP API.

These are external contracts: field names follow what the web client
sends (camelCase), and field-level business validation is left to the
domain so both the CLI and the API report the same messages.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CustomerSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class OrderItemSchema(BaseModel):
    """One cart line. ``price``/``metal``/``weight`` are the client's echo of
    the catalog and are not trusted: the stored snapshot comes from the catalog.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    quantity: int
    name: str | None = None
    price: Decimal | None = None
    metal: str | None = None
    weight: Decimal | None = None


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer: CustomerSchema
    items: list[OrderItemSchema] = []
    total: Decimal | None = None
    status: str | None = None  # new orders always start pending
    idempotency_key: str | None = Field(default=None, alias="idempotencyKey")


class UpdateStatusRequest(BaseModel):
    status: str = ""


class CreateProductRequest(BaseModel):
    name: str = ""
    category: str = ""
    metal: str = ""
    weight: Decimal
    price: Decimal
    stock: int = 0
    description: str = ""
    image: str = ""


class UpdateProductRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    metal: str | None = None
    weight: Decimal | None = None
    price: Decimal | None = None
    stock: int | None = None
    description: str | None = None
    image: str | None = None
