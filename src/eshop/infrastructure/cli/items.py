"""Parsing of ``--items`` options shared by several commands."""

from __future__ import annotations

import click

from eshop.application.dto import ItemSpec


def parse_items(raw: str) -> list[ItemSpec]:
    """Parse 'sku-1:3,sku-2:5' into an ItemSpec list."""
    specs: list[ItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(ItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs
