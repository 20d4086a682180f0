"""Order aggregate: header plus priced line items.

The Order is an aggregate root that owns its lines.  Its total is computed
once, when the order is created, and stored from then on.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from eshop.domain.exceptions import ValidationError
from eshop.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CREATED = "Created"
    CONFIRMED = "Confirmed"
    FAILED = "Failed"


@dataclass(frozen=True)
class OrderLine:
    """Captures the price of a product at order-creation time."""

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    def __post_init__(self) -> None:
        if not self.product_id or not self.product_id.strip():
            raise ValidationError("Product ID cannot be empty")
        if not self.unit_price.is_positive:
            raise ValidationError("Unit price must be positive")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def _new_order_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it validates the
    input and computes ``total_amount``.  The ``__init__`` is kept simple so
    the ledger can reconstitute persisted orders with their stored total.
    """

    id: str
    user_id: str
    lines: list[OrderLine]
    total_amount: Money
    status: OrderStatus = OrderStatus.CREATED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: str, lines: list[OrderLine]) -> Order:
        """Create a new order in ``Created`` status."""
        if not user_id or not user_id.strip():
            raise ValidationError("User ID cannot be empty")

        if not lines:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero(lines[0].unit_price.currency)
        for line in lines:
            total = total + line.line_total

        return Order(
            id=_new_order_id(),
            user_id=user_id,
            lines=list(lines),
            total_amount=total,
        )

    # --- State transitions ----------------------------------------------------

    def mark_confirmed(self) -> None:
        """Transition Created -> Confirmed."""
        if self.status != OrderStatus.CREATED:
            raise ValidationError(
                f"Cannot confirm order in {self.status.value} status"
            )
        self.status = OrderStatus.CONFIRMED

    def mark_failed(self) -> None:
        """Transition Created -> Failed."""
        if self.status != OrderStatus.CREATED:
            raise ValidationError(
                f"Cannot mark order as failed in {self.status.value} status"
            )
        self.status = OrderStatus.FAILED
