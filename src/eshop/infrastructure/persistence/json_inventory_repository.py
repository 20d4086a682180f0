"""JSON-file-backed implementation of InventoryRepository.

The conditional write (compare version, then write) runs under a lock
that is shared by every repository instance pointing at the same file, so
it is atomic within one process.  The lock covers only the file access,
never a caller's read-modify-write cycle.
"""

from __future__ import annotations

import json
from pathlib import Path

from eshop.domain.exceptions import (
    ConcurrencyConflictError,
    StockNotFoundError,
    ValidationError,
)
from eshop.domain.model.stock import StockRecord
from eshop.domain.repository.inventory_repository import InventoryRepository
from eshop.infrastructure.persistence.locks import lock_for


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path)
        self._ensure_file()

    # --- InventoryRepository interface ----------------------------------------

    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        with self._lock:
            records = self._load_raw()
        for raw in records:
            if raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockRecord]:
        with self._lock:
            records = self._load_raw()
        return [self._to_domain(raw) for raw in records]

    def add(self, record: StockRecord) -> None:
        with self._lock:
            records = self._load_raw()
            if any(raw["product_id"] == record.product_id for raw in records):
                raise ValidationError(
                    f"Stock record for product {record.product_id} already exists"
                )
            records.append(self._to_raw(record))
            self._persist_raw(records)

    def save(self, record: StockRecord, expected_version: int) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["product_id"] != record.product_id:
                    continue
                if raw["version"] != expected_version:
                    raise ConcurrencyConflictError(
                        f"Stock for product {record.product_id} is at version "
                        f"{raw['version']}, expected {expected_version}"
                    )
                record.version = expected_version + 1
                records[i] = self._to_raw(record)
                self._persist_raw(records)
                return
        raise StockNotFoundError(record.product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: StockRecord) -> dict:
        return {
            "product_id": record.product_id,
            "quantity": record.quantity,
            "reserved": record.reserved,
            "version": record.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockRecord:
        return StockRecord(
            product_id=raw["product_id"],
            quantity=raw["quantity"],
            reserved=raw["reserved"],
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
