"""
                        Services Module

Services used by the client session, following the same pattern:
an abstract base plus local and remote implementations.

Services:
    - orders: order store access (in-process or over HTTP)
    - notifications: customer-facing messages
"""

from canteen.services.orders import get_order_service

__all__ = ["get_order_service"]
