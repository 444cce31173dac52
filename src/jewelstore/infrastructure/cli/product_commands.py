"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from jewelstore.application.add_product import AddProductHandler
from jewelstore.application.list_products import ListProductsHandler
from jewelstore.application.seed_catalog import SeedCatalogHandler
from jewelstore.application.update_product import UpdateProductHandler
from jewelstore.domain.exceptions import DomainException
from jewelstore.domain.model.product import Category, Metal
from jewelstore.infrastructure.bootstrap import product_repository

CATEGORIES = click.Choice([c.value for c in Category])
METALS = click.Choice([m.value for m in Metal])


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, type=CATEGORIES)
@click.option("--metal", required=True, type=METALS)
@click.option("--weight", required=True, help="Weight in grams (e.g. 5.5).")
@click.option("--price", required=True, help="Price (e.g. 45000).")
@click.option("--stock", default=0, type=int, help="Units in stock.")
@click.option("--description", default="", help="Free-text description.")
def product_add(
    name: str, category: str, metal: str, weight: str, price: str, stock: int, description: str
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            category=category,
            metal=metal,
            weight=weight,
            price=price,
            stock=stock,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--category", default=None, type=CATEGORIES, help="Only this category.")
@click.option("--metal", default=None, type=METALS, help="Only this metal.")
@click.option("--search", default=None, help="Match name or description.")
def product_list(category: str | None, metal: str | None, search: str | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())
    products = handler.handle(category=category, metal=metal, search=search)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Category':<10} {'Metal':<10} {'Price':>14} {'Stock':>6}")
    click.echo("-" * 103)
    for p in products:
        click.echo(
            f"{p.id:<34} {p.name:<24} {p.category.value:<10} {p.metal.value:<10} "
            f"{str(p.price):>14} {p.stock:>6}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--name", default=None, help="New name.")
def product_update(
    product_id: str, price: str | None, stock: int | None, name: str | None
) -> None:
    """Update a product's price, stock or name."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, price=price, stock=stock, name=name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: {product.price}, {product.stock} in stock")


@click.command("seed")
def product_seed() -> None:
    """Load sample jewelry into an empty catalog."""
    added = SeedCatalogHandler(product_repo=product_repository()).handle()
    if added:
        click.echo(f"Added {added} sample products.")
    else:
        click.echo("Catalog already has products; nothing added.")
