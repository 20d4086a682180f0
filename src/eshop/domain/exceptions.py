"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the API boundary and the CLI can catch them uniformly and show the
message to the caller.  Infrastructure failures are deliberately *not*
DomainExceptions: they surface as generic errors.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """The catalog has no product with the given ID."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class StockNotFoundError(EntityNotFoundError):
    """No stock record exists for the given product."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"No inventory record for product {product_id}")
        self.product_id = product_id


class InsufficientStockError(DomainException):
    """A reservation could not be satisfied from available stock."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient inventory for product {product_id} "
            f"(need {requested}, have {available} available)"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidReservationStateError(DomainException):
    """A cancel/confirm/adjust references more units than are reserved."""


class ConcurrencyConflictError(DomainException):
    """A conditional update found a newer version than the one it read."""


class DependencyUnavailableError(Exception):
    """Storage or a downstream service failed or timed out."""
