"""Unit tests for the ReservationEngine domain service."""

import pytest

from eshop.domain.exceptions import (
    ConcurrencyConflictError,
    DependencyUnavailableError,
    InsufficientStockError,
    InvalidReservationStateError,
    StockNotFoundError,
    ValidationError,
)
from eshop.domain.model.stock import StockRecord
from eshop.domain.service.reservation_engine import ReservationEngine
from tests.fakes import FakeInventoryRepository


def _make_engine(*specs: tuple[str, int, int], max_attempts: int = 5):
    """Create engine + repo from (product_id, quantity, reserved) tuples."""
    repo = FakeInventoryRepository(
        [StockRecord(product_id=pid, quantity=q, reserved=r) for pid, q, r in specs]
    )
    return ReservationEngine(repo, max_attempts=max_attempts), repo


class AlwaysConflictingRepository(FakeInventoryRepository):

    def save(self, record, expected_version):
        self.save_calls += 1
        raise ConcurrencyConflictError("someone else won")


class ConflictOnceRepository(FakeInventoryRepository):
    """Another writer sneaks in one reservation before the first save."""

    def __init__(self, records):
        super().__init__(records)
        self._interfered = False

    def save(self, record, expected_version):
        if not self._interfered:
            self._interfered = True
            intruder = self.get_by_product_id(record.product_id)
            intruder.reserve(3)
            super().save(intruder, expected_version=intruder.version)
        super().save(record, expected_version)


class TestReserve:

    def test_reserve_updates_stored_record(self):
        engine, repo = _make_engine(("A", 10, 0))
        engine.reserve("A", 5)
        stored = repo.get_by_product_id("A")
        assert (stored.quantity, stored.reserved) == (10, 5)
        assert stored.available == 5

    def test_reserve_bumps_version(self):
        engine, repo = _make_engine(("A", 10, 0))
        engine.reserve("A", 1)
        engine.reserve("A", 1)
        assert repo.get_by_product_id("A").version == 2

    def test_insufficient_stock_leaves_state_unchanged(self):
        engine, repo = _make_engine(("A", 10, 5))
        with pytest.raises(InsufficientStockError, match="product A"):
            engine.reserve("A", 8)
        stored = repo.get_by_product_id("A")
        assert (stored.quantity, stored.reserved) == (10, 5)
        assert repo.save_calls == 0

    def test_unknown_product_rejected(self):
        engine, _ = _make_engine()
        with pytest.raises(StockNotFoundError, match="No inventory record"):
            engine.reserve("missing", 1)

    def test_non_positive_amount_rejected_before_write(self):
        engine, repo = _make_engine(("A", 10, 0))
        with pytest.raises(ValidationError):
            engine.reserve("A", 0)
        assert repo.save_calls == 0

    def test_retries_after_version_conflict(self):
        repo = ConflictOnceRepository([StockRecord(product_id="A", quantity=10)])
        engine = ReservationEngine(repo)
        engine.reserve("A", 5)
        assert repo.get_by_product_id("A").reserved == 8

    def test_retry_rechecks_availability(self):
        # After the intruder takes 3 of 10, 8 no longer fits.
        repo = ConflictOnceRepository([StockRecord(product_id="A", quantity=10)])
        engine = ReservationEngine(repo)
        with pytest.raises(InsufficientStockError):
            engine.reserve("A", 8)
        assert repo.get_by_product_id("A").reserved == 3

    def test_gives_up_after_max_attempts(self):
        repo = AlwaysConflictingRepository([StockRecord(product_id="A", quantity=10)])
        engine = ReservationEngine(repo, max_attempts=3)
        with pytest.raises(DependencyUnavailableError, match="too many concurrent updates"):
            engine.reserve("A", 1)
        assert repo.save_calls == 3
        assert repo.get_by_product_id("A").reserved == 0

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            ReservationEngine(FakeInventoryRepository(), max_attempts=0)


class TestCancelAndConfirm:

    def test_reserve_then_cancel_restores_record(self):
        engine, repo = _make_engine(("A", 10, 2))
        engine.reserve("A", 4)
        engine.cancel_reservation("A", 4)
        stored = repo.get_by_product_id("A")
        assert (stored.quantity, stored.reserved) == (10, 2)

    def test_reserve_then_confirm_removes_units(self):
        engine, repo = _make_engine(("A", 10, 0))
        engine.reserve("A", 4)
        engine.confirm_reservation("A", 4)
        stored = repo.get_by_product_id("A")
        assert (stored.quantity, stored.reserved) == (6, 0)

    def test_cancel_more_than_reserved_rejected(self):
        engine, _ = _make_engine(("A", 10, 1))
        with pytest.raises(InvalidReservationStateError):
            engine.cancel_reservation("A", 2)

    def test_confirm_on_missing_record_rejected(self):
        engine, _ = _make_engine()
        with pytest.raises(StockNotFoundError):
            engine.confirm_reservation("A", 1)


class TestQuantityAndQueries:

    def test_create_stock(self):
        engine, repo = _make_engine()
        engine.create_stock("A", 7)
        assert repo.get_by_product_id("A").available == 7

    def test_create_existing_stock_rejected(self):
        engine, _ = _make_engine(("A", 1, 0))
        with pytest.raises(ValidationError, match="already exists"):
            engine.create_stock("A", 7)

    def test_update_quantity_respects_reservations(self):
        engine, repo = _make_engine(("A", 10, 6))
        with pytest.raises(InvalidReservationStateError):
            engine.update_quantity("A", 5)
        engine.update_quantity("A", 6)
        assert repo.get_by_product_id("A").quantity == 6

    def test_can_reserve(self):
        engine, _ = _make_engine(("A", 10, 5))
        assert engine.can_reserve("A", 5)
        assert not engine.can_reserve("A", 6)

    def test_get_stock_returns_detached_copy(self):
        engine, repo = _make_engine(("A", 10, 0))
        record = engine.get_stock("A")
        record.reserved = 10
        assert repo.get_by_product_id("A").reserved == 0

    def test_list_stock_sorted_by_product(self):
        engine, _ = _make_engine(("B", 1, 0), ("A", 2, 0))
        assert [r.product_id for r in engine.list_stock()] == ["A", "B"]
