"""Application service: List Orders use case (query)."""

from __future__ import annotations

from eshop.application.dto import OrderDTO, order_to_dto
from eshop.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None = None) -> list[OrderDTO]:
        if user_id is not None:
            orders = self._order_repo.list_by_user(user_id)
        else:
            orders = self._order_repo.list_all()
        orders.sort(key=lambda o: o.created_at)
        return [order_to_dto(o) for o in orders]
