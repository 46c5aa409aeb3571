from webinars.notifiers.interfaces import Notifier
from webinars.notifiers.mail import DjangoMailNotifier
from webinars.notifiers.memory import InMemoryNotifier

__all__ = ["Notifier", "DjangoMailNotifier", "InMemoryNotifier"]
