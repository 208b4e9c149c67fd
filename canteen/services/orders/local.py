"""
Local Order Service

Calls an OrderStore living in the same process. Used in development
and by tests; no serialization, no network.
"""

import logging

from canteen.schemas import CreateOrderRequest, Order
from canteen.services.orders.base import BaseOrderService
from canteen.store import OrderStore

logger = logging.getLogger(__name__)


class LocalOrderService(BaseOrderService):
    """Order service backed by an in-process store."""

    def __init__(self, store: OrderStore):
        self.store = store
        logger.info("LocalOrderService initialized")

    @property
    def provider_name(self) -> str:
        return "local"

    async def create_order(self, request: CreateOrderRequest) -> Order:
        return self.store.create_order(
            items=request.items,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            total=request.total,
        )

    async def get_orders(self) -> list[Order]:
        return self.store.get_orders()

    async def complete_order(self, token: str) -> None:
        self.store.complete_order(token)

    async def health_check(self) -> bool:
        """Local store is always reachable."""
        return True
