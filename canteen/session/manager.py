"""
Client Session Manager

One customer's view of the counter: the cart being built, the tokens of
orders this client has placed, and a mirror of every order fetched from
the store. "My orders" is derived from the last two.

Store calls go through a BaseOrderService and never raise out of the
session. Failures are logged, shown to the customer as a notification
and kept in ``error`` until the next fetch.
"""

import logging
from typing import Optional

from canteen.schemas import CartItem, CreateOrderRequest, MenuItem, Order
from canteen.services.notifications import (
    DESTRUCTIVE,
    BaseNotifier,
    LogNotifier,
    Notification,
)
from canteen.services.orders import BaseOrderService
from canteen.session.cart import Cart
from canteen.session.tokens import TokenFile

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch orders."
CREATE_FAILED = "Failed to place order."
UPDATE_FAILED = "Failed to update order."
EMPTY_CART = "Your cart is empty"


class SessionManager:
    """
    Cart and order tracking for a single client.

    Args:
        order_service: Where orders are created, listed and completed
        token_file: Persistence for this client's order tokens
        notifier: Channel for customer-facing messages
        remember_tokens: False for a session that never reads or writes a
            token file (a kitchen screen, for instance)
    """

    def __init__(
        self,
        order_service: BaseOrderService,
        token_file: Optional[TokenFile] = None,
        notifier: Optional[BaseNotifier] = None,
        remember_tokens: bool = True,
    ):
        self.order_service = order_service
        self.token_file: Optional[TokenFile] = None
        if remember_tokens:
            self.token_file = token_file or TokenFile()
        self.notifier = notifier or LogNotifier()

        self.cart = Cart()
        self.my_tokens: list[str] = []
        self.orders: list[Order] = []
        self.loading = True
        self.error: Optional[str] = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> None:
        """Restore remembered tokens, then fetch all orders."""
        if self.token_file is not None:
            self.my_tokens = self.token_file.load()
        logger.info(f"Session started with {len(self.my_tokens)} remembered orders")
        await self.refresh_orders()

    # =========================================================================
    # CART
    # =========================================================================

    def add_to_cart(self, item: MenuItem) -> None:
        self.cart.add(item)

    def remove_from_cart(self, item_id: str) -> None:
        self.cart.remove(item_id)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        self.cart.update_quantity(item_id, quantity)

    def clear_cart(self) -> None:
        self.cart.clear()

    @property
    def cart_items(self) -> list[CartItem]:
        return self.cart.items

    @property
    def cart_total(self) -> float:
        return self.cart.total

    @property
    def cart_count(self) -> int:
        return self.cart.count

    # =========================================================================
    # ORDERS
    # =========================================================================

    @property
    def my_orders(self) -> list[Order]:
        """Orders placed by this client, newest first by timestamp."""
        mine = [order for order in self.orders if order.token in self.my_tokens]
        return sorted(mine, key=lambda order: order.timestamp, reverse=True)

    async def refresh_orders(self) -> None:
        """Replace the order mirror with the store's current list."""
        self.loading = True
        self.error = None
        try:
            self.orders = await self.order_service.get_orders()
        except Exception as e:
            self._fail(FETCH_FAILED, "Could not load orders. Please try again later.", e)
        finally:
            self.loading = False

    async def place_order(self, customer_name: str, customer_phone: str) -> Optional[str]:
        """
        Submit the cart as an order.

        The store is not called when the cart is empty.

        Returns:
            The new order's token, or None if the cart was empty or the
            store call failed
        """
        if self.cart.is_empty:
            self.notifier.notify(Notification(title=EMPTY_CART, variant=DESTRUCTIVE))
            return None

        self.loading = True
        try:
            order = await self.order_service.create_order(
                CreateOrderRequest(
                    items=self.cart.snapshot(),
                    customer_name=customer_name,
                    customer_phone=customer_phone,
                    total=self.cart_total,
                )
            )

            await self.refresh_orders()

            self.my_tokens = [*self.my_tokens, order.token]
            if self.token_file is not None:
                self.token_file.save(self.my_tokens)

            self.clear_cart()
            logger.info(f"Order {order.token} placed for {customer_name}")
            return order.token
        except Exception as e:
            self._fail(CREATE_FAILED, "Could not place your order. Please try again.", e)
            return None
        finally:
            self.loading = False

    async def complete_order(self, token: str) -> None:
        """Mark an order completed and refresh the mirror."""
        self.loading = True
        try:
            await self.order_service.complete_order(token)
            await self.refresh_orders()
        except Exception as e:
            self._fail(UPDATE_FAILED, "Could not update order status.", e)
        finally:
            self.loading = False

    def _fail(self, message: str, description: str, exc: Exception) -> None:
        self.error = message
        logger.exception(f"{message} ({exc})")
        self.notifier.notify(
            Notification(title="Error", description=description, variant=DESTRUCTIVE)
        )
