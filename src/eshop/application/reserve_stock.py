"""Application service: Reserve Stock use case.

Reserves a batch of items all-or-nothing from the caller's point of view.
Internally the items are reserved one by one, in the order given; if any
of them fails, the ones already reserved are cancelled again.
"""

from __future__ import annotations

import logging
from functools import partial

from eshop.application.dto import ItemSpec
from eshop.application.saga import Saga, SagaStep
from eshop.domain.exceptions import ValidationError
from eshop.domain.model.value_objects import Quantity
from eshop.domain.service.reservation_engine import ReservationEngine

logger = logging.getLogger(__name__)


def reservation_steps(
    engine: ReservationEngine,
    items: list[tuple[str, int]],
) -> list[SagaStep]:
    """One saga step per ``(product_id, quantity)``, compensated by a cancel."""
    return [
        SagaStep(
            name=f"Reserve {quantity} x {product_id}",
            action=partial(engine.reserve, product_id, quantity),
            compensation=partial(engine.cancel_reservation, product_id, quantity),
        )
        for product_id, quantity in items
    ]


def validate_items(item_specs: list[ItemSpec]) -> list[tuple[str, int]]:
    """Reject malformed items before any side effect happens."""
    if not item_specs:
        raise ValidationError("At least one item is required")
    items: list[tuple[str, int]] = []
    for spec in item_specs:
        if not spec.product_id or not spec.product_id.strip():
            raise ValidationError("Product ID cannot be empty")
        items.append((spec.product_id, Quantity(spec.quantity).value))
    return items


class ReserveStockHandler:

    def __init__(self, engine: ReservationEngine) -> None:
        self._engine = engine

    def handle(self, item_specs: list[ItemSpec]) -> None:
        """Reserve every item or none of them.

        Raises the error of the first item that could not be reserved
        (typically InsufficientStockError) after the earlier items have
        been released.
        """
        items = validate_items(item_specs)
        logger.info("Attempting to reserve inventory for %d products", len(items))

        Saga("reserve-stock", reservation_steps(self._engine, items)).execute()

        logger.info("Successfully reserved inventory for all products")
