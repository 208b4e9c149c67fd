"""
Client session: cart, remembered order tokens and "my orders".
"""

from canteen.session.cart import Cart
from canteen.session.manager import SessionManager
from canteen.session.tokens import TokenFile

__all__ = ["Cart", "SessionManager", "TokenFile"]
