"""Notifier interface.

Delivery is one-way: no reply is expected from the recipient.
"""

from abc import ABC, abstractmethod

from webinars.domain import Notification


class Notifier(ABC):
    """Interface for delivering messages to event owners."""

    @abstractmethod
    def send(self, notification: Notification) -> None:
        """Deliver a notification.

        Raises:
            NotifierError: If the message could not be handed off.
        """
        ...
