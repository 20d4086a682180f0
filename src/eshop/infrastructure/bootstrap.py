"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from eshop.domain.repository.product_repository import ProductCatalog
from eshop.domain.service.reservation_engine import ReservationEngine
from eshop.infrastructure.config import Settings
from eshop.infrastructure.http.product_catalog_client import HttpProductCatalog
from eshop.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from eshop.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from eshop.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def product_catalog(settings: Settings) -> ProductCatalog:
    """The remote catalog service when configured, else the local table."""
    if settings.catalog_url:
        return HttpProductCatalog(settings.catalog_url, timeout=settings.http_timeout)
    return product_repository(settings)


def inventory_repository(settings: Settings) -> JsonInventoryRepository:
    return JsonInventoryRepository(settings.data_dir / "stock.json")


def reservation_engine(settings: Settings) -> ReservationEngine:
    return ReservationEngine(
        inventory_repository(settings),
        max_attempts=settings.reserve_max_attempts,
    )


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(
        settings.data_dir / "orders.json",
        settings.data_dir / "order_lines.json",
    )
