"""CLI commands for stock management."""

from __future__ import annotations

import click

from eshop.application.get_stock import GetStockHandler
from eshop.application.reserve_stock import ReserveStockHandler
from eshop.application.set_stock import SetStockHandler
from eshop.domain.exceptions import DomainException
from eshop.infrastructure import bootstrap
from eshop.infrastructure.api import endpoints
from eshop.infrastructure.cli.items import parse_items
from eshop.infrastructure.config import Settings


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Total quantity in stock.")
@click.pass_obj
def inventory_set(settings: Settings, product_id: str, quantity: int) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(bootstrap.reservation_engine(settings))

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Inventory for '{product_id}' set to {dto.quantity} "
        f"({dto.reserved} reserved, {dto.available} available)"
    )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.pass_obj
def inventory_show(settings: Settings, product_id: str | None) -> None:
    """Show current stock levels."""
    handler = GetStockHandler(bootstrap.reservation_engine(settings))

    if product_id is not None:
        resp = endpoints.get_stock(handler, product_id)
        if not resp.ok:
            raise click.ClickException(resp.body["error_message"])
        lines = [resp.body]
    else:
        lines = [
            {"product_id": d.product_id, "quantity": d.quantity,
             "reserved": d.reserved, "available": d.available}
            for d in handler.handle_all()
        ]

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'Product':<20} {'Total':>8} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 50)
    for line in lines:
        click.echo(
            f"{line['product_id']:<20} {line['quantity']:>8} "
            f"{line['reserved']:>10} {line['available']:>10}"
        )


@click.command("reserve")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def inventory_reserve(settings: Settings, items: str) -> None:
    """Reserve stock for several products, all or nothing."""
    handler = ReserveStockHandler(bootstrap.reservation_engine(settings))
    resp = endpoints.reserve_stock(handler, parse_items(items))
    if not resp.ok:
        raise click.ClickException(resp.body["error_message"])
    click.echo("Inventory reserved.")
