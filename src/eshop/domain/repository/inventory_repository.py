"""Abstract repository for StockRecord aggregates.

Writes are conditional: ``save`` succeeds only when the stored version is
still the one the caller read.  Implementations must perform the compare
and the write as one atomic step on their side of the boundary.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.stock import StockRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        """Return a detached copy of the stock record, or None."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return every stock record."""

    @abstractmethod
    def add(self, record: StockRecord) -> None:
        """Insert a new record.  Raises ValidationError if one exists."""

    @abstractmethod
    def save(self, record: StockRecord, expected_version: int) -> None:
        """Persist *record* if the stored version equals *expected_version*.

        On success the stored version and ``record.version`` become
        ``expected_version + 1``.  Raises ConcurrencyConflictError when
        another writer got there first, StockNotFoundError when the record
        is gone.
        """
