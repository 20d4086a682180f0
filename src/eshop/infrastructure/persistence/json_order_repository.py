"""JSON-file-backed implementation of OrderRepository.

Mirrors the table layout of the order ledger: one file of order headers
keyed by ``(user_id, id)`` and one file of order lines keyed by
``(order_id, line_no)``.  Callers see ``create`` as a single write; on disk
the header is written first, then the lines.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from eshop.domain.exceptions import EntityNotFoundError, ValidationError
from eshop.domain.model.order import Order, OrderLine, OrderStatus
from eshop.domain.model.value_objects import Money, Quantity
from eshop.domain.repository.order_repository import OrderRepository
from eshop.infrastructure.persistence.locks import lock_for


class JsonOrderRepository(OrderRepository):

    def __init__(self, orders_path: Path, lines_path: Path) -> None:
        self._orders_path = orders_path
        self._lines_path = lines_path
        self._lock = lock_for(orders_path)
        self._ensure_file(orders_path)
        self._ensure_file(lines_path)

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> None:
        with self._lock:
            headers = self._load_raw(self._orders_path)
            if any(h["id"] == order.id for h in headers):
                raise ValidationError(f"Order {order.id} already exists")
            headers.append(self._header_to_raw(order))
            self._persist_raw(self._orders_path, headers)

            lines = self._load_raw(self._lines_path)
            lines.extend(self._lines_to_raw(order))
            self._persist_raw(self._lines_path, lines)

    def update(self, order: Order) -> None:
        with self._lock:
            headers = self._load_raw(self._orders_path)
            for h in headers:
                if h["id"] == order.id:
                    h["status"] = order.status.value
                    self._persist_raw(self._orders_path, headers)
                    return
        raise EntityNotFoundError(f"Order {order.id} not found")

    def delete(self, order_id: str) -> None:
        with self._lock:
            lines = self._load_raw(self._lines_path)
            self._persist_raw(
                self._lines_path, [r for r in lines if r["order_id"] != order_id]
            )
            headers = self._load_raw(self._orders_path)
            self._persist_raw(
                self._orders_path, [h for h in headers if h["id"] != order_id]
            )

    def get_by_id(self, order_id: str) -> Order | None:
        for order in self._load_orders(lambda h: h["id"] == order_id):
            return order
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return self._load_orders(lambda h: h["user_id"] == user_id)

    def list_all(self) -> list[Order]:
        return self._load_orders(lambda h: True)

    # --- Serialization --------------------------------------------------------

    def _load_orders(self, predicate) -> list[Order]:
        with self._lock:
            headers = self._load_raw(self._orders_path)
            lines = self._load_raw(self._lines_path)

        lines_by_order: dict[str, list[dict]] = {}
        for raw in lines:
            lines_by_order.setdefault(raw["order_id"], []).append(raw)

        return [
            self._to_domain(h, sorted(lines_by_order.get(h["id"], []), key=lambda r: r["line_no"]))
            for h in headers
            if predicate(h)
        ]

    @staticmethod
    def _header_to_raw(order: Order) -> dict:
        return {
            "user_id": order.user_id,
            "id": order.id,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _lines_to_raw(order: Order) -> list[dict]:
        return [
            {
                "order_id": order.id,
                "line_no": line_no,
                "product_id": line.product_id,
                "quantity": line.quantity.value,
                "unit_price": str(line.unit_price.amount),
                "currency": line.unit_price.currency,
            }
            for line_no, line in enumerate(order.lines, start=1)
        ]

    @staticmethod
    def _to_domain(header: dict, lines: list[dict]) -> Order:
        return Order(
            id=header["id"],
            user_id=header["user_id"],
            lines=[
                OrderLine(
                    product_id=raw["product_id"],
                    quantity=Quantity(raw["quantity"]),
                    unit_price=Money(Decimal(raw["unit_price"]), raw.get("currency", "USD")),
                )
                for raw in lines
            ],
            total_amount=Money(Decimal(header["total_amount"]), header.get("currency", "USD")),
            status=OrderStatus(header["status"]),
            created_at=datetime.fromisoformat(header["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _persist_raw(path: Path, rows: list[dict]) -> None:
        path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")

    @staticmethod
    def _ensure_file(path: Path) -> None:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
