"""
Customer Notifications

The toast-style messages a session shows its user: "Your cart is
empty", "Could not place your order", and so on. LogNotifier writes
them to the log and keeps them in memory so a front end (or a test)
can read them back.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A message for the customer."""
    title: str
    description: Optional[str] = None
    variant: str = DEFAULT

    @property
    def is_destructive(self) -> bool:
        return self.variant == DESTRUCTIVE


class BaseNotifier(ABC):
    """Abstract base class for notification channels."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Show a notification to the customer."""
        pass


class LogNotifier(BaseNotifier):
    """Logs notifications and keeps them in ``history``."""

    def __init__(self):
        self.history: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        text = notification.title
        if notification.description:
            text = f"{text}: {notification.description}"

        if notification.is_destructive:
            logger.warning(f"Notification: {text}")
        else:
            logger.info(f"Notification: {text}")

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
