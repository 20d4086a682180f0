"""CLI commands for the local product catalog."""

from __future__ import annotations

import click

from eshop.domain.exceptions import DomainException
from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.infrastructure import bootstrap
from eshop.infrastructure.config import Settings


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.99).")
@click.pass_obj
def product_add(settings: Settings, product_id: str, name: str, price: str) -> None:
    """Add or replace a product in the local catalog."""
    repo = bootstrap.product_repository(settings)

    try:
        product = Product(id=product_id, name=name.strip(), price=Money.of(price))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    repo.save(product)

    click.echo(f"Product {product.id} '{product.name}' saved at {product.price}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the local catalog."""
    products = bootstrap.product_repository(settings).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<20} {'Price':>10}")
    click.echo("-" * 44)
    for p in products:
        click.echo(f"{p.id:<12} {p.name:<20} {str(p.price):>10}")
