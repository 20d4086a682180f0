"""StockRecord aggregate: per-product stock count and reservations.

Each product has exactly one StockRecord.  The four mutators
(``reserve``, ``cancel_reservation``, ``confirm_reservation`` and
``update_quantity``) are the only legal ways to change it, so the
invariant is enforced in one place.

``version`` belongs to the storage layer: the repository bumps it on every
successful conditional write, and the reservation engine uses it to detect
concurrent writers.
"""

from __future__ import annotations

from dataclasses import dataclass

from eshop.domain.exceptions import (
    InsufficientStockError,
    InvalidReservationStateError,
    ValidationError,
)


def _require_positive(amount: int, what: str) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise ValidationError(f"{what} amount must be an integer")
    if amount <= 0:
        raise ValidationError(f"{what} amount must be positive")


@dataclass
class StockRecord:
    """Aggregate root for stock tracking.

    Invariants:
    - ``0 <= reserved <= quantity`` after every mutation
    - ``available`` is always >= 0
    """

    product_id: str
    quantity: int
    reserved: int = 0
    version: int = 0

    def __post_init__(self) -> None:
        if not self.product_id or not self.product_id.strip():
            raise ValidationError("Product ID cannot be empty")
        if self.quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        if not 0 <= self.reserved <= self.quantity:
            raise ValidationError(
                f"Reserved must be between 0 and {self.quantity}, got {self.reserved}"
            )

    @property
    def available(self) -> int:
        return self.quantity - self.reserved

    def can_reserve(self, amount: int) -> bool:
        """Pure predicate: is there enough available stock for *amount*?"""
        _require_positive(amount, "Reservation")
        return self.available >= amount

    def reserve(self, amount: int) -> None:
        """Hold *amount* units against an in-flight order."""
        if not self.can_reserve(amount):
            raise InsufficientStockError(self.product_id, amount, self.available)
        self.reserved += amount

    def cancel_reservation(self, amount: int) -> None:
        """Release a previous hold (compensates ``reserve``)."""
        _require_positive(amount, "Cancellation")
        if amount > self.reserved:
            raise InvalidReservationStateError(
                f"Cannot cancel reservation of {amount} items for product "
                f"{self.product_id} as only {self.reserved} are reserved"
            )
        self.reserved -= amount

    def confirm_reservation(self, amount: int) -> None:
        """Permanently remove held units from stock.

        Both ``quantity`` and ``reserved`` decrease by the same amount.
        """
        _require_positive(amount, "Confirmation")
        if amount > self.reserved:
            raise InvalidReservationStateError(
                f"Cannot confirm reservation of {amount} items for product "
                f"{self.product_id} as only {self.reserved} are reserved"
            )
        self.reserved -= amount
        self.quantity -= amount

    def update_quantity(self, new_quantity: int) -> None:
        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool):
            raise ValidationError("Quantity must be an integer")
        if new_quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        if new_quantity < self.reserved:
            raise InvalidReservationStateError(
                f"Cannot set quantity to {new_quantity} as {self.reserved} "
                f"items are reserved for product {self.product_id}"
            )
        self.quantity = new_quantity
