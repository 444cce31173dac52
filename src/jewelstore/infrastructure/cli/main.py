import click

from jewelstore.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_stats,
    order_status,
)
from jewelstore.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_seed,
    product_update,
)
from jewelstore.infrastructure.config import load_settings
from jewelstore.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Jewelry store: catalog and orders"""
    configure_logging(load_settings())


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default from settings).")
@click.option("--port", default=None, type=int, help="Port to listen on (default from settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from jewelstore.infrastructure.api.app import create_app

    settings = load_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.host,
        port=port or settings.port,
    )


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_seed)
product.add_command(product_update)
