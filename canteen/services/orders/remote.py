"""
HTTP Order Service

Talks to the order API (canteen.main) with an httpx.AsyncClient.

Every failure, whether the connection drops, the API answers with a
non-2xx status, or the body does not parse as orders, surfaces as
OrderServiceError so the session can handle them in one place.
"""

import logging
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from canteen.core.config import get_settings
from canteen.schemas import CreateOrderRequest, Order
from canteen.services.orders.base import BaseOrderService, OrderServiceError

logger = logging.getLogger(__name__)

_order_list = TypeAdapter(list[Order])


class HttpOrderService(BaseOrderService):
    """
    Order service calling the REST API.

    Args:
        base_url: API root, e.g. http://localhost:8001
        client: Pre-built client (tests pass one wired to the ASGI app)
        timeout: Transport timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.order_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.order_service_timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)
        logger.info(f"HttpOrderService initialized ({self.base_url})")

    @property
    def provider_name(self) -> str:
        return "http"

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} returned {e.response.status_code}")
            raise OrderServiceError(
                f"{method} {path} failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} transport error: {e}")
            raise OrderServiceError(f"{method} {path} failed: {e}") from e
        return response

    async def create_order(self, request: CreateOrderRequest) -> Order:
        response = await self._request(
            "POST",
            "/api/orders",
            json=request.model_dump(mode="json", by_alias=True),
        )
        try:
            return Order.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise OrderServiceError(f"Malformed order in response: {e}") from e

    async def get_orders(self) -> list[Order]:
        response = await self._request("GET", "/api/orders")
        try:
            return _order_list.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise OrderServiceError(f"Malformed order list in response: {e}") from e

    async def complete_order(self, token: str) -> None:
        await self._request("POST", "/api/orders/complete", json={"token": token})

    async def health_check(self) -> bool:
        try:
            await self._request("GET", "/health")
            return True
        except OrderServiceError:
            return False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
