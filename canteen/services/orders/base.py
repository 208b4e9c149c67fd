"""
Order Service Abstract Base Class

The contract between a client session and the order store. The session
only ever calls these three operations; whether the store lives in the
same process or behind the HTTP API is up to the implementation.

Design Pattern: Strategy Pattern
    - LocalOrderService calls an OrderStore directly
    - HttpOrderService calls the FastAPI app with httpx
"""

from abc import ABC, abstractmethod

from canteen.schemas import CreateOrderRequest, Order


class OrderServiceError(Exception):
    """The order store could not be reached or answered with an error."""


class BaseOrderService(ABC):
    """Abstract base class for order services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def create_order(self, request: CreateOrderRequest) -> Order:
        """Place an order and return it as stored."""
        pass

    @abstractmethod
    async def get_orders(self) -> list[Order]:
        """Fetch every order, most recent first."""
        pass

    @abstractmethod
    async def complete_order(self, token: str) -> None:
        """Mark an order completed. Unknown tokens are not an error."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
