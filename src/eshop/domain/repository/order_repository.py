"""Abstract repository for Order aggregates (the order ledger)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> None:
        """Persist a new order header together with its lines."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist a status change of an existing order."""

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order and its lines.  Missing orders are ignored."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return every order placed by *user_id*."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""
