"""
Order Service Factory

Provides a single entry point for obtaining an order service instance.
Automatically selects the local store or the HTTP API based on ENV_MODE.

Usage:
    from canteen.services.orders import get_order_service

    orders = get_order_service()
    all_orders = await orders.get_orders()
"""

import logging
from functools import lru_cache

from canteen.core.config import get_settings
from canteen.services.orders.base import BaseOrderService, OrderServiceError
from canteen.services.orders.remote import HttpOrderService
from canteen.services.orders.local import LocalOrderService
from canteen.store import OrderStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_order_service() -> BaseOrderService:
    """
    Get the configured order service instance.

    Development mode gets a LocalOrderService owning a fresh OrderStore;
    staging and production get an HttpOrderService pointed at
    ORDER_SERVICE_URL.
    """
    settings = get_settings()

    if settings.use_real_services:
        logger.info(
            f"Order Service: Using HttpOrderService "
            f"({settings.env_mode.value} mode)"
        )
        return HttpOrderService()
    else:
        logger.info("Order Service: Using LocalOrderService (development mode)")
        return LocalOrderService(OrderStore(unique_tokens=settings.unique_tokens))


def reset_order_service() -> None:
    """
    Clear the cached order service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_order_service.cache_clear()
    logger.debug("Order service cache cleared")


__all__ = [
    "get_order_service",
    "reset_order_service",
    "BaseOrderService",
    "OrderServiceError",
    "LocalOrderService",
    "HttpOrderService",
]
