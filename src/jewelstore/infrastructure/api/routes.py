"""FastAPI routes for orders and products.

Routes are plain ``def`` functions: the handlers do blocking file I/O, so
FastAPI runs each request in its threadpool and requests proceed
concurrently.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from jewelstore.application.add_product import AddProductHandler
from jewelstore.application.cancel_order import CancelOrderHandler
from jewelstore.application.delete_product import DeleteProductHandler
from jewelstore.application.dto import CustomerSpec, OrderItemSpec
from jewelstore.application.list_orders import ListOrdersHandler
from jewelstore.application.list_products import ListProductsHandler
from jewelstore.application.order_stats import OrderStatsHandler
from jewelstore.application.place_order import PlaceOrderHandler
from jewelstore.application.show_order import ShowOrderHandler
from jewelstore.application.update_order_status import UpdateOrderStatusHandler
from jewelstore.application.update_product import UpdateProductHandler
from jewelstore.domain.repository.order_repository import OrderRepository
from jewelstore.domain.repository.product_repository import ProductRepository
from jewelstore.infrastructure.api.schemas import (
    CreateOrderRequest,
    CreateProductRequest,
    UpdateProductRequest,
    UpdateStatusRequest,
)
from jewelstore.infrastructure.api.serializers import (
    order_json,
    product_json,
    stats_json,
)


def get_order_repo(request: Request) -> OrderRepository:
    return request.app.state.order_repo


def get_product_repo(request: Request) -> ProductRepository:
    return request.app.state.product_repo


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
def list_orders(
    status: str | None = None,
    sortBy: str = "createdAt",
    order: str = "desc",
    orders: OrderRepository = Depends(get_order_repo),
    products: ProductRepository = Depends(get_product_repo),
) -> list[dict]:
    handler = ListOrdersHandler(orders, products)
    return [
        order_json(dto)
        for dto in handler.handle(status=status or None, sort_by=sortBy, direction=order)
    ]


@order_router.get("/stats")
def order_stats(orders: OrderRepository = Depends(get_order_repo)) -> dict:
    return stats_json(OrderStatsHandler(orders).handle())


@order_router.get("/{order_id}")
def get_order(
    order_id: str,
    orders: OrderRepository = Depends(get_order_repo),
    products: ProductRepository = Depends(get_product_repo),
) -> dict:
    return order_json(ShowOrderHandler(orders, products).handle(order_id))


@order_router.post("", status_code=201)
def create_order(
    body: CreateOrderRequest,
    orders: OrderRepository = Depends(get_order_repo),
    products: ProductRepository = Depends(get_product_repo),
) -> JSONResponse:
    """Place an order. Replaying an idempotency key answers 200 with the
    order created the first time.
    """
    result = PlaceOrderHandler(orders, products).handle(
        customer=CustomerSpec(
            name=body.customer.name or "",
            email=body.customer.email or "",
            phone=body.customer.phone or "",
            address=body.customer.address or "",
        ),
        item_specs=[
            OrderItemSpec(product_id=item.product_id, quantity=item.quantity, name=item.name)
            for item in body.items
        ],
        total=body.total,
        idempotency_key=body.idempotency_key,
    )
    return JSONResponse(
        status_code=201 if result.created else 200,
        content=order_json(result.order),
    )


@order_router.patch("/{order_id}/status")
def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    orders: OrderRepository = Depends(get_order_repo),
    products: ProductRepository = Depends(get_product_repo),
) -> dict:
    handler = UpdateOrderStatusHandler(orders, products)
    return order_json(handler.handle(order_id, body.status))


@order_router.patch("/{order_id}/cancel")
def cancel_order(
    order_id: str,
    orders: OrderRepository = Depends(get_order_repo),
    products: ProductRepository = Depends(get_product_repo),
) -> dict:
    return order_json(CancelOrderHandler(orders, products).handle(order_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("")
def list_products(
    category: str | None = None,
    metal: str | None = None,
    search: str | None = None,
    products: ProductRepository = Depends(get_product_repo),
) -> list[dict]:
    # The web client sends category=all for "no filter"
    handler = ListProductsHandler(products)
    found = handler.handle(
        category=None if category in (None, "", "all") else category,
        metal=None if metal in (None, "", "all") else metal,
        search=search,
    )
    return [product_json(p) for p in found]


@product_router.get("/{product_id}")
def get_product(
    product_id: str, products: ProductRepository = Depends(get_product_repo)
) -> dict:
    return product_json(ListProductsHandler(products).get(product_id))


@product_router.post("", status_code=201)
def create_product(
    body: CreateProductRequest,
    products: ProductRepository = Depends(get_product_repo),
) -> dict:
    product = AddProductHandler(products).handle(**body.model_dump())
    return product_json(product)


@product_router.put("/{product_id}")
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    products: ProductRepository = Depends(get_product_repo),
) -> dict:
    product = UpdateProductHandler(products).handle(product_id, **body.model_dump())
    return product_json(product)


@product_router.delete("/{product_id}")
def delete_product(
    product_id: str, products: ProductRepository = Depends(get_product_repo)
) -> dict:
    DeleteProductHandler(products).handle(product_id)
    return {"message": "Product deleted successfully"}
