"""Abstract catalog ports.

``ProductCatalog`` is the read-only lookup order placement depends on.  It
may be served locally or by the remote catalog service.
``ProductRepository`` adds the write side used to seed a local catalog.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eshop.domain.model.product import Product


class ProductCatalog(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return the product with its current price, or None."""


class ProductRepository(ProductCatalog):

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
