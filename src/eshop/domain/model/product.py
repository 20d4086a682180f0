"""Product: a catalog entry as seen by order placement.

The catalog owns products; the order side only needs the current price
to snapshot into order lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from eshop.domain.exceptions import ValidationError
from eshop.domain.model.value_objects import Money


@dataclass
class Product:

    id: str
    name: str
    price: Money

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID cannot be empty")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name cannot be empty")
        if not self.price.is_positive:
            raise ValidationError("Product price must be greater than zero")
