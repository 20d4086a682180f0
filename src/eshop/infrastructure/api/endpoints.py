"""Boundary operations with HTTP-style status mapping.

Each function wraps one use case and turns its outcome into an
``ApiResponse``.  Expected business failures carry their message;
anything else is logged and answered with a generic 500 so internal
details never reach the caller.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from eshop.application.dto import ItemSpec
from eshop.application.get_stock import GetStockHandler
from eshop.application.list_orders import ListOrdersHandler
from eshop.application.place_order import PlaceOrderHandler
from eshop.application.reserve_stock import ReserveStockHandler
from eshop.domain.exceptions import DomainException, StockNotFoundError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while processing your request."


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _failure(status_code: int, message: str) -> ApiResponse:
    return ApiResponse(status_code, {"success": False, "error_message": message})


def reserve_stock(handler: ReserveStockHandler, items: list[ItemSpec]) -> ApiResponse:
    try:
        handler.handle(items)
    except DomainException as exc:
        return _failure(400, str(exc))
    except Exception:
        logger.exception("Error reserving inventory")
        return _failure(500, GENERIC_ERROR)
    return ApiResponse(200, {"success": True})


def get_stock(handler: GetStockHandler, product_id: str) -> ApiResponse:
    try:
        dto = handler.handle(product_id)
    except StockNotFoundError as exc:
        return _failure(404, str(exc))
    except DomainException as exc:
        return _failure(400, str(exc))
    except Exception:
        logger.exception("Error getting inventory for product %s", product_id)
        return _failure(500, GENERIC_ERROR)
    return ApiResponse(200, asdict(dto))


def create_order(
    handler: PlaceOrderHandler,
    user_id: str,
    items: list[ItemSpec],
) -> ApiResponse:
    try:
        dto = handler.handle(user_id, items)
    except DomainException as exc:
        return _failure(400, str(exc))
    except Exception:
        logger.exception("Error creating order for user %s", user_id)
        return _failure(500, GENERIC_ERROR)
    return ApiResponse(200, {"success": True, "order_id": dto.id, "order": asdict(dto)})


def list_orders(handler: ListOrdersHandler, user_id: str | None = None) -> ApiResponse:
    try:
        dtos = handler.handle(user_id)
    except Exception:
        logger.exception("Error getting orders for user %s", user_id or "all")
        return _failure(500, GENERIC_ERROR)
    return ApiResponse(200, [asdict(d) for d in dtos])
