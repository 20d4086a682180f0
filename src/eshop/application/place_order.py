"""Application service: Place Order use case (the order placement saga).

Steps:
1. Price every cart line through the product catalog.  An unknown product
   aborts before anything has been reserved.
2. Reserve stock for every line, in cart order.  A failure cancels the
   reservations made so far.
3. Persist the order (status Created) in the order ledger.
4. Mark it Confirmed and persist the status change.

If step 3 or 4 fails, the reservations are released and an order that was
already written is deleted again, so a failed placement leaves neither an
order nor held stock behind.
"""

from __future__ import annotations

import logging
from functools import partial

from eshop.application.dto import ItemSpec, OrderDTO, order_to_dto
from eshop.application.reserve_stock import reservation_steps, validate_items
from eshop.application.saga import Saga, SagaStep
from eshop.domain.exceptions import ProductNotFoundError, ValidationError
from eshop.domain.model.order import Order, OrderLine
from eshop.domain.model.value_objects import Quantity
from eshop.domain.repository.order_repository import OrderRepository
from eshop.domain.repository.product_repository import ProductCatalog
from eshop.domain.service.reservation_engine import ReservationEngine

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
        engine: ReservationEngine,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog
        self._engine = engine

    def handle(self, user_id: str, item_specs: list[ItemSpec]) -> OrderDTO:
        if not user_id or not user_id.strip():
            raise ValidationError("User ID cannot be empty")
        items = validate_items(item_specs)

        lines = self._price_cart(items)
        order = Order.create(user_id=user_id, lines=lines)

        steps = reservation_steps(self._engine, items)
        steps.append(
            SagaStep(
                name="Create order",
                action=partial(self._order_repo.create, order),
                compensation=partial(self._order_repo.delete, order.id),
            )
        )
        steps.append(SagaStep(name="Confirm order", action=partial(self._confirm, order)))

        Saga("place-order", steps).execute()

        logger.info("Created order %s for user %s", order.id, user_id)
        return order_to_dto(order)

    # --- Internal helpers -----------------------------------------------------

    def _price_cart(self, items: list[tuple[str, int]]) -> list[OrderLine]:
        lines: list[OrderLine] = []
        for product_id, quantity in items:
            product = self._catalog.get_product(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            lines.append(
                OrderLine(
                    product_id=product_id,
                    quantity=Quantity(quantity),
                    unit_price=product.price,  # <-- price snapshot
                )
            )
        return lines

    def _confirm(self, order: Order) -> None:
        order.mark_confirmed()
        self._order_repo.update(order)
