"""
In-Memory Order Store

Holds every placed order in a single list, newest first. There is no
persistence and no locking: the store is owned by one FastAPI app (or
handed to a LocalOrderService) and only touched from the event loop.

Tokens are random 4-digit strings drawn independently per order. Two
orders can share a token; lookups by token then hit the newest one.
Set ``unique_tokens`` to redraw on collision instead.

Every order handed out is a deep copy; only complete_order changes what
the store holds.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from canteen.schemas import CartItem, Order, OrderStatus

logger = logging.getLogger(__name__)

TOKEN_MIN = 1000
TOKEN_MAX = 9999


class TokenSpaceExhaustedError(RuntimeError):
    """Every 4-digit token is already taken (only with unique_tokens)."""


def generate_token(rng: Optional[random.Random] = None) -> str:
    """Draw a random order token in [1000, 9999]."""
    rng = rng or random
    return str(rng.randint(TOKEN_MIN, TOKEN_MAX))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStore:
    """Ordered, process-local collection of orders."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
        unique_tokens: bool = False,
    ):
        self._orders: list[Order] = []
        self._rng = rng or random.Random()
        self._clock = clock
        self.unique_tokens = unique_tokens

    def __len__(self) -> int:
        return len(self._orders)

    def _next_token(self) -> str:
        token = generate_token(self._rng)
        taken = {order.token for order in self._orders}

        if token not in taken:
            return token

        if not self.unique_tokens:
            logger.warning(f"Token {token} is already used by another order")
            return token

        if len(taken) >= TOKEN_MAX - TOKEN_MIN + 1:
            raise TokenSpaceExhaustedError("All order tokens are in use")

        while token in taken:
            token = generate_token(self._rng)
        return token

    def create_order(
        self,
        items: Iterable[CartItem],
        customer_name: str,
        customer_phone: str,
        total: float,
    ) -> Order:
        """
        Record a new order at the front of the list.

        Inputs are stored as given: an empty item list, a zero total or a
        total that does not match the items are all accepted.

        Returns:
            The created order with its token, timestamp and status "new"
        """
        order = Order(
            token=self._next_token(),
            items=list(items),
            customer_name=customer_name,
            customer_phone=customer_phone,
            total=total,
            timestamp=self._clock(),
            status=OrderStatus.NEW,
        )
        self._orders.insert(0, order)

        logger.info(f"Order {order.token} created for {customer_name} (total {total:.2f})")
        return order.model_copy(deep=True)

    def get_orders(self) -> list[Order]:
        """All orders, most recent first, as copies detached from the store."""
        return [order.model_copy(deep=True) for order in self._orders]

    def _locate(self, token: str) -> Optional[Order]:
        for order in self._orders:
            if order.token == token:
                return order
        return None

    def find(self, token: str) -> Optional[Order]:
        """Copy of the first order carrying ``token``, or None."""
        order = self._locate(token)
        return order.model_copy(deep=True) if order is not None else None

    def complete_order(self, token: str) -> bool:
        """
        Mark the first order with ``token`` as completed.

        Unknown tokens are ignored. Completing an order twice leaves it
        completed.

        Returns:
            True if an order with that token exists, False otherwise
        """
        order = self._locate(token)
        if order is None:
            logger.debug(f"Complete requested for unknown token {token}")
            return False

        order.status = OrderStatus.COMPLETED
        logger.info(f"Order {token} completed")
        return True
