"""Email delivery through Django's mail framework."""

from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail

from webinars.domain import Notification
from webinars.domain.errors import NotifierError
from webinars.notifiers.interfaces import Notifier


class DjangoMailNotifier(Notifier):
    """Sends notifications as plain-text email via the configured EMAIL_BACKEND."""

    def __init__(self, from_email: str | None = None) -> None:
        self._from_email = from_email

    def send(self, notification: Notification) -> None:
        try:
            send_mail(
                subject=notification.subject,
                message=notification.body,
                from_email=self._from_email or settings.DEFAULT_FROM_EMAIL,
                recipient_list=[notification.to],
                fail_silently=False,
            )
        except (SMTPException, OSError) as exc:
            raise NotifierError(f"Could not deliver notification to {notification.to}") from exc
