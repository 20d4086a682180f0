"""Domain service: Reservation Engine.

Every change to a StockRecord goes through this service.  Each mutation is
an optimistic compare-and-swap against the inventory repository:

  1. read the record and remember its version
  2. apply the domain mutation in memory (this enforces the invariant)
  3. write it back conditionally on the remembered version
  4. on a version conflict, start again from a fresh read

Nothing is locked between the read and the write, so the engine is safe
with any number of service instances sharing the same store.  A caller that
sees ``InsufficientStockError`` is guaranteed that the decision was made
against the latest committed state.

Calls are not idempotent: two ``reserve`` calls with the same arguments
reserve twice.
"""

from __future__ import annotations

import logging
from typing import Callable

from eshop.domain.exceptions import (
    ConcurrencyConflictError,
    DependencyUnavailableError,
    StockNotFoundError,
    ValidationError,
)
from eshop.domain.model.stock import StockRecord
from eshop.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class ReservationEngine:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._inventory_repo = inventory_repo
        self._max_attempts = max_attempts

    # --- Queries --------------------------------------------------------------

    def get_stock(self, product_id: str) -> StockRecord:
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID cannot be empty")
        record = self._inventory_repo.get_by_product_id(product_id)
        if record is None:
            raise StockNotFoundError(product_id)
        return record

    def list_stock(self) -> list[StockRecord]:
        return sorted(self._inventory_repo.list_all(), key=lambda r: r.product_id)

    def can_reserve(self, product_id: str, amount: int) -> bool:
        return self.get_stock(product_id).can_reserve(amount)

    # --- Mutators -------------------------------------------------------------

    def create_stock(self, product_id: str, quantity: int) -> StockRecord:
        """Register a product with *quantity* units and nothing reserved."""
        record = StockRecord(product_id=product_id, quantity=quantity)
        self._inventory_repo.add(record)
        logger.info("Created stock record for product %s with %d units", product_id, quantity)
        return record

    def reserve(self, product_id: str, amount: int) -> StockRecord:
        record = self._mutate(product_id, lambda r: r.reserve(amount))
        logger.info("Reserved %d items for product %s", amount, product_id)
        return record

    def cancel_reservation(self, product_id: str, amount: int) -> StockRecord:
        record = self._mutate(product_id, lambda r: r.cancel_reservation(amount))
        logger.info("Cancelled reservation of %d items for product %s", amount, product_id)
        return record

    def confirm_reservation(self, product_id: str, amount: int) -> StockRecord:
        record = self._mutate(product_id, lambda r: r.confirm_reservation(amount))
        logger.info("Confirmed reservation of %d items for product %s", amount, product_id)
        return record

    def update_quantity(self, product_id: str, new_quantity: int) -> StockRecord:
        record = self._mutate(product_id, lambda r: r.update_quantity(new_quantity))
        logger.info("Set quantity of product %s to %d", product_id, new_quantity)
        return record

    # --- Internal helpers -----------------------------------------------------

    def _mutate(
        self,
        product_id: str,
        mutation: Callable[[StockRecord], None],
    ) -> StockRecord:
        """Apply *mutation* with a version-checked write, retrying on conflict.

        Domain errors raised by *mutation* propagate immediately; they are
        decisions about the current state, not transient failures.
        """
        for attempt in range(1, self._max_attempts + 1):
            record = self.get_stock(product_id)
            expected_version = record.version
            mutation(record)
            try:
                self._inventory_repo.save(record, expected_version=expected_version)
            except ConcurrencyConflictError:
                logger.debug(
                    "Version conflict on product %s (attempt %d/%d)",
                    product_id, attempt, self._max_attempts,
                )
                continue
            return record

        logger.warning(
            "Gave up updating product %s after %d conflicting attempts",
            product_id, self._max_attempts,
        )
        raise DependencyUnavailableError(
            f"Could not update stock for product {product_id}: "
            f"too many concurrent updates"
        )
