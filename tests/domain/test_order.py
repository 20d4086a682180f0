"""Unit tests for the Order aggregate and its business rules."""

from decimal import Decimal

import pytest

from eshop.domain.exceptions import ValidationError
from eshop.domain.model.order import Order, OrderLine, OrderStatus
from eshop.domain.model.value_objects import Money, Quantity


def _make_line(product_id: str = "A", qty: int = 1, price: str = "9.99") -> OrderLine:
    """Helper to build a valid order line."""
    return OrderLine(
        product_id=product_id,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(user_id="alice", lines=[_make_line(qty=2, price="9.99")])
        assert order.user_id == "alice"
        assert order.status == OrderStatus.CREATED
        assert len(order.lines) == 1
        assert order.total_amount == Money.of("19.98")

    def test_id_is_assigned_and_unique(self):
        first = Order.create("alice", [_make_line()])
        second = Order.create("alice", [_make_line()])
        assert first.id
        assert first.id != second.id

    def test_total_is_sum_of_lines(self):
        lines = [
            _make_line("A", qty=3, price="15.00"),
            _make_line("B", qty=5, price="25.00"),
        ]
        order = Order.create("bob", lines)
        assert order.total_amount.amount == Decimal("170.00")

    def test_lines_keep_cart_order(self):
        order = Order.create("bob", [_make_line("B"), _make_line("A")])
        assert [line.product_id for line in order.lines] == ["B", "A"]

    def test_total_is_not_recomputed(self):
        # Reconstituted orders keep whatever total was stored.
        order = Order(
            id="o-1",
            user_id="bob",
            lines=[_make_line(qty=1, price="5.00")],
            total_amount=Money.of("4.50"),
        )
        assert order.total_amount == Money.of("4.50")


class TestOrderValidation:

    def test_empty_user_id_rejected(self):
        with pytest.raises(ValidationError, match="User ID"):
            Order.create("", [_make_line()])

    def test_whitespace_user_id_rejected(self):
        with pytest.raises(ValidationError, match="User ID"):
            Order.create("   ", [_make_line()])

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("alice", [])


class TestOrderStatusTransitions:

    def test_confirm_from_created(self):
        order = Order.create("alice", [_make_line()])
        order.mark_confirmed()
        assert order.status == OrderStatus.CONFIRMED

    def test_fail_from_created(self):
        order = Order.create("alice", [_make_line()])
        order.mark_failed()
        assert order.status == OrderStatus.FAILED

    def test_confirm_twice_rejected(self):
        order = Order.create("alice", [_make_line()])
        order.mark_confirmed()
        with pytest.raises(ValidationError, match="Cannot confirm order in Confirmed status"):
            order.mark_confirmed()

    def test_fail_after_confirm_rejected(self):
        order = Order.create("alice", [_make_line()])
        order.mark_confirmed()
        with pytest.raises(ValidationError, match="Cannot mark order as failed"):
            order.mark_failed()


class TestOrderLine:

    def test_line_total_calculation(self):
        line = _make_line(qty=3, price="15.00")
        assert line.line_total == Money.of("45.00")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="Unit price must be positive"):
            _make_line(price="0")

    def test_empty_product_id_rejected(self):
        with pytest.raises(ValidationError, match="Product ID"):
            _make_line(product_id="")

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _make_line(qty=0)

    def test_line_is_immutable(self):
        line = _make_line()
        with pytest.raises(AttributeError):
            line.unit_price = Money.of("1.00")
