import threading

from webinars.domain import Notification
from webinars.domain.errors import NotifierError
from webinars.notifiers.interfaces import Notifier


class InMemoryNotifier(Notifier):
    """Records notifications instead of delivering them."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self._sent: list[Notification] = []
        self._lock = threading.Lock()

    def send(self, notification: Notification) -> None:
        if self.fail:
            raise NotifierError("Notifier is unavailable")
        with self._lock:
            self._sent.append(notification)

    @property
    def sent(self) -> list[Notification]:
        with self._lock:
            return list(self._sent)
