"""Render DTOs and products in the JSON shape the web client expects."""

from __future__ import annotations

from decimal import Decimal

from jewelstore.application.dto import OrderDTO, OrderStatsDTO
from jewelstore.domain.model.product import Product


def number(value: Decimal | None) -> int | float | None:
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def order_json(order: OrderDTO) -> dict:
    return {
        "_id": order.id,
        "customer": {
            "name": order.customer.name,
            "email": order.customer.email,
            "phone": order.customer.phone,
            "address": order.customer.address,
        },
        "items": [
            {
                # Populated with current catalog fields when the product exists
                "productId": (
                    {
                        "_id": item.product.id,
                        "name": item.product.name,
                        "category": item.product.category,
                        "metal": item.product.metal,
                    }
                    if item.product
                    else item.product_id
                ),
                "name": item.name,
                "price": number(item.price),
                "quantity": item.quantity,
                "metal": item.metal,
                "weight": number(item.weight),
            }
            for item in order.items
        ],
        "total": number(order.total),
        "status": order.status,
        "idempotencyKey": order.idempotency_key,
        "createdAt": order.created_at.isoformat(),
        "updatedAt": order.updated_at.isoformat(),
    }


def stats_json(stats: OrderStatsDTO) -> dict:
    return {
        "statusBreakdown": [
            {
                "_id": row.status,
                "count": row.count,
                "totalRevenue": number(row.total_revenue),
            }
            for row in stats.status_breakdown
        ],
        "totalOrders": stats.total_orders,
        "totalRevenue": number(stats.total_revenue),
    }


def product_json(product: Product) -> dict:
    return {
        "_id": product.id,
        "name": product.name,
        "category": product.category.value,
        "metal": product.metal.value,
        "weight": number(product.weight.grams),
        "price": number(product.price.amount),
        "stock": product.stock,
        "description": product.description,
        "image": product.image,
        "createdAt": product.created_at.isoformat(),
        "updatedAt": product.updated_at.isoformat(),
    }
