"""CLI commands for orders."""

from __future__ import annotations

import click

from eshop.application.list_orders import ListOrdersHandler
from eshop.application.place_order import PlaceOrderHandler
from eshop.infrastructure import bootstrap
from eshop.infrastructure.api import endpoints
from eshop.infrastructure.cli.items import parse_items
from eshop.infrastructure.config import Settings


@click.command("create")
@click.option("--user", "user_id", required=True, help="User ID placing the order.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_create(settings: Settings, user_id: str, items: str) -> None:
    """Place an order: price, reserve stock, persist and confirm."""
    specs = parse_items(items)

    handler = PlaceOrderHandler(
        order_repo=bootstrap.order_repository(settings),
        catalog=bootstrap.product_catalog(settings),
        engine=bootstrap.reservation_engine(settings),
    )
    resp = endpoints.create_order(handler, user_id, specs)
    if not resp.ok:
        raise click.ClickException(resp.body["error_message"])

    order = resp.body["order"]
    click.echo(f"Order {order['id']} placed  (status={order['status']})")
    click.echo(f"User: {order['user_id']}")
    click.echo()
    _echo_lines(order)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only orders of this user.")
@click.pass_obj
def order_list(settings: Settings, user_id: str | None) -> None:
    """List orders, optionally for one user."""
    handler = ListOrdersHandler(order_repo=bootstrap.order_repository(settings))
    resp = endpoints.list_orders(handler, user_id)
    if not resp.ok:
        raise click.ClickException(resp.body["error_message"])

    if not resp.body:
        click.echo("No orders found.")
        return

    for order in resp.body:
        click.echo(f"Order {order['id']}  (status={order['status']})")
        click.echo(f"User:    {order['user_id']}")
        click.echo(f"Created: {order['created_at']}")
        _echo_lines(order)
        click.echo()


def _echo_lines(order: dict) -> None:
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in order["items"]:
        click.echo(
            f"  {item['product_id']:<20} {item['quantity']:>5} "
            f"{item['unit_price']:>10} {item['total_price']:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {order['total_amount']:>20}")
