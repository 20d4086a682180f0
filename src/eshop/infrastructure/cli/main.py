import click

from eshop.infrastructure.cli.inventory_commands import (
    inventory_reserve,
    inventory_set,
    inventory_show,
)
from eshop.infrastructure.cli.order_commands import order_create, order_list
from eshop.infrastructure.cli.product_commands import product_add, product_list
from eshop.infrastructure.config import Settings, configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override ESHOP_LOG_LEVEL (e.g. INFO).")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """eshop: order placement and inventory reservation"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc))
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Place and list orders."""


@cli.group()
def product() -> None:
    """Manage the local product catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock and reservations."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
product.add_command(product_add)
product.add_command(product_list)
inventory.add_command(inventory_reserve)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
