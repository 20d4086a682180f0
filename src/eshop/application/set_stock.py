"""Application service: Set Stock use case."""

from __future__ import annotations

from eshop.application.dto import StockDTO, stock_to_dto
from eshop.domain.exceptions import StockNotFoundError
from eshop.domain.service.reservation_engine import ReservationEngine


class SetStockHandler:

    def __init__(self, engine: ReservationEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str, quantity: int) -> StockDTO:
        """Set the total quantity owned for a product.

        Creates the stock record on first use.  An existing record keeps its
        reservations, so the new quantity may not drop below them.
        """
        try:
            record = self._engine.update_quantity(product_id, quantity)
        except StockNotFoundError:
            record = self._engine.create_stock(product_id, quantity)
        return stock_to_dto(record)
