"""Remote ProductCatalog served by the catalog service over HTTP.

``GET {base_url}/api/products/{product_id}`` returns
``{"id": ..., "name": ..., "price": ...}`` or 404.

Every request has a timeout.  Timeouts, connection errors and unexpected
status codes all become DependencyUnavailableError, which order placement
treats as a failed step.

Usage::

    with HttpProductCatalog("http://catalog:8080", timeout=2.0) as catalog:
        product = catalog.get_product("sku-1")
"""

from __future__ import annotations

import logging

import httpx

from eshop.domain.exceptions import DependencyUnavailableError, ValidationError
from eshop.domain.model.product import Product
from eshop.domain.model.value_objects import Money
from eshop.domain.repository.product_repository import ProductCatalog

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class HttpProductCatalog(ProductCatalog):

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> HttpProductCatalog:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_product(self, product_id: str) -> Product | None:
        try:
            resp = self._client.get(f"/api/products/{product_id}")
        except httpx.TimeoutException as exc:
            logger.warning("Catalog lookup for product %s timed out", product_id)
            raise DependencyUnavailableError(
                f"Catalog lookup for product {product_id} timed out"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Catalog lookup for product %s failed: %s", product_id, exc)
            raise DependencyUnavailableError(
                f"Catalog lookup for product {product_id} failed"
            ) from exc

        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        if resp.status_code != httpx.codes.OK:
            logger.warning(
                "Catalog returned HTTP %d for product %s", resp.status_code, product_id
            )
            raise DependencyUnavailableError(
                f"Catalog lookup for product {product_id} returned HTTP {resp.status_code}"
            )

        try:
            payload = resp.json()
            return Product(
                id=str(payload["id"]),
                name=payload["name"],
                price=Money.of(payload["price"]),
            )
        except (ValueError, KeyError, TypeError, ValidationError) as exc:
            raise DependencyUnavailableError(
                f"Catalog returned a malformed product for {product_id}"
            ) from exc
