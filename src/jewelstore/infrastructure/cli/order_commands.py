"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from jewelstore.application.cancel_order import CancelOrderHandler
from jewelstore.application.dto import CustomerSpec, OrderDTO, OrderItemSpec
from jewelstore.application.list_orders import ListOrdersHandler
from jewelstore.application.order_stats import OrderStatsHandler
from jewelstore.application.place_order import PlaceOrderHandler
from jewelstore.application.show_order import ShowOrderHandler
from jewelstore.application.update_order_status import UpdateOrderStatusHandler
from jewelstore.domain.exceptions import DomainException
from jewelstore.domain.model.order import OrderStatus
from jewelstore.domain.model.value_objects import Money
from jewelstore.infrastructure.bootstrap import order_repository, product_repository

STATUSES = click.Choice([s.value for s in OrderStatus])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'ID:2,ID:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _money(amount) -> str:
    return str(Money(amount))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer.name} <{dto.customer.email}>, {dto.customer.phone}")
    click.echo(f"Ship to:  {dto.customer.address}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Metal':<10} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*71}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.metal or '':<10} {item.quantity:>5} "
            f"{_money(item.price):>14} {_money(item.line_total):>14}"
        )
    click.echo(f"  {'-'*71}")
    click.echo(f"  {'Order Total':<41} {_money(dto.total):>29}")


@click.command("create")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--total", default=None, help="Expected order total; rejected if it differs.")
@click.option("--key", "idempotency_key", default=None, help="Idempotency key for safe retries.")
def order_create(
    name: str,
    email: str,
    phone: str,
    address: str,
    items: str,
    total: str | None,
    idempotency_key: str | None,
) -> None:
    """Place a new order (reserves stock)."""
    specs = _parse_items(items)

    handler = PlaceOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        result = handler.handle(
            customer=CustomerSpec(name=name, email=email, phone=phone, address=address),
            item_specs=specs,
            total=total,
            idempotency_key=idempotency_key,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.created:
        click.echo("Order already placed with this key; nothing changed.")
    _display_order(result.order)


@click.command("list")
@click.option("--status", default=None, type=STATUSES, help="Only orders in this status.")
@click.option("--sort-by", default="created_at", help="created_at, updated_at, total or status.")
@click.option("--order", "direction", default="desc", type=click.Choice(["asc", "desc"]))
def order_list(status: str | None, sort_by: str, direction: str) -> None:
    """List orders."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        orders = handler.handle(status=status, sort_by=sort_by, direction=direction)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Customer':<20} {'Status':<11} {'Total':>14}  Created")
    click.echo("-" * 100)
    for dto in orders:
        click.echo(
            f"{dto.id:<34} {dto.customer.name:<20} {dto.status:<11} "
            f"{_money(dto.total):>14}  {dto.created_at.strftime('%Y-%m-%d %H:%M')}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", required=True, help="pending, processing, completed or cancelled.")
def order_status(order_id: str, status: str) -> None:
    """Change the status of an order."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
def order_cancel(order_id: str) -> None:
    """Cancel an order (returns its items to stock)."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled, stock restored.")


@click.command("stats")
def order_stats() -> None:
    """Show order counts and revenue per status."""
    stats = OrderStatsHandler(order_repo=order_repository()).handle()

    click.echo(f"{'Status':<12} {'Orders':>7} {'Revenue':>16}")
    click.echo("-" * 37)
    for row in stats.status_breakdown:
        click.echo(f"{row.status:<12} {row.count:>7} {_money(row.total_revenue):>16}")
    click.echo("-" * 37)
    click.echo(f"{'All':<12} {stats.total_orders:>7} {_money(stats.total_revenue):>16}")
    click.echo("(revenue total excludes cancelled orders)")
