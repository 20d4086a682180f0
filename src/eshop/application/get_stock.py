"""Application service: Get Stock use case (query)."""

from __future__ import annotations

from eshop.application.dto import StockDTO, stock_to_dto
from eshop.domain.service.reservation_engine import ReservationEngine


class GetStockHandler:

    def __init__(self, engine: ReservationEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str) -> StockDTO:
        """Raises StockNotFoundError when the product has no stock record."""
        return stock_to_dto(self._engine.get_stock(product_id))

    def handle_all(self) -> list[StockDTO]:
        return [stock_to_dto(r) for r in self._engine.list_stock()]
