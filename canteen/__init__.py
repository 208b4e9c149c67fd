"""
                Canteen Ordering

Menu, cart and token-based order tracking for a small restaurant
counter: an in-memory order store served over FastAPI, and the
client session that builds carts and follows its own orders.

License: MIT
"""

__version__ = "1.0.0"
