"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the API/CLI and application layers without
exposing domain internals to the outside world.  Amounts are rendered as
plain decimal strings (``"19.98"``).
"""

from __future__ import annotations

from dataclasses import dataclass

from eshop.domain.model.order import Order
from eshop.domain.model.stock import StockRecord


@dataclass(frozen=True)
class ItemSpec:
    """Input: a product ID and how many units of it."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:

    product_id: str
    quantity: int
    unit_price: str
    total_price: str


@dataclass(frozen=True)
class OrderDTO:

    id: str
    user_id: str
    status: str
    total_amount: str
    created_at: str  # ISO-8601, UTC
    items: list[OrderLineDTO]


@dataclass(frozen=True)
class StockDTO:

    product_id: str
    quantity: int
    reserved: int
    available: int


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        status=order.status.value,
        total_amount=str(order.total_amount.amount),
        created_at=order.created_at.isoformat(),
        items=[
            OrderLineDTO(
                product_id=line.product_id,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price.amount),
                total_price=str(line.line_total.amount),
            )
            for line in order.lines
        ],
    )


def stock_to_dto(record: StockRecord) -> StockDTO:
    return StockDTO(
        product_id=record.product_id,
        quantity=record.quantity,
        reserved=record.reserved,
        available=record.available,
    )
