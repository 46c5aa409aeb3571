"""Admission service - decides whether an attendee gets a seat.

The lookup, checks and append for one event run inside the ledger's
per-event critical section. The owner is notified only after that section
has been left, once the admission is durable. Notification failures are
logged and never undo or fail an admission.
"""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from webinars.domain import (
    Admission,
    AdmissionError,
    AdmissionResult,
    Attendee,
    Event,
    EventId,
    Notification,
)
from webinars.domain.errors import DuplicateAdmissionError, LedgerError
from webinars.notifiers.interfaces import Notifier
from webinars.stores.interfaces import AdmissionLedger, EventStore

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_owner_notification(event: Event, attendee: Attendee) -> Notification:
    return Notification(
        to=event.owner_id,
        subject=f"New participant for webinar: {event.title}",
        body=f"A new participant, {attendee.email}, has registered for your webinar.",
    )


class AdmissionService:
    """Service for admitting attendees to webinars."""

    def __init__(
        self,
        event_store: EventStore,
        ledger: AdmissionLedger,
        notifier: Notifier,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._event_store = event_store
        self._ledger = ledger
        self._notifier = notifier
        self._clock = clock or _utcnow

    def admit(self, event_id: EventId, attendee: Attendee) -> AdmissionResult:
        """Admit an attendee to an event.

        Returns a failed result for an unknown event, a repeat admission or a
        full event. Ledger faults propagate as LedgerError with nothing recorded.
        """
        log = logger.bind(event_id=str(event_id), attendee_id=str(attendee.id))

        try:
            with self._ledger.lock_event(event_id):
                event = self._event_store.get_event(event_id)
                if event is None:
                    log.info("Admission rejected", reason=AdmissionError.EVENT_NOT_FOUND.value)
                    return AdmissionResult.failure(AdmissionError.EVENT_NOT_FOUND)

                rejection = self._check_admissible(event, attendee)
                if rejection is not None:
                    log.info("Admission rejected", reason=rejection.value)
                    return AdmissionResult.failure(rejection)

                admission = Admission.create(event.id, attendee.id, self._clock())
                try:
                    self._ledger.append(admission)
                except DuplicateAdmissionError:
                    log.info(
                        "Admission rejected",
                        reason=AdmissionError.ALREADY_ADMITTED.value,
                        detected_by="storage",
                    )
                    return AdmissionResult.failure(AdmissionError.ALREADY_ADMITTED)
        except LedgerError:
            log.exception("Admission ledger failure")
            raise

        log.info("Admission recorded", admission_id=str(admission.id))
        self._notify_owner(event, attendee, log)
        return AdmissionResult.success(admission)

    def _check_admissible(self, event: Event, attendee: Attendee) -> AdmissionError | None:
        if self._ledger.exists_for_event_and_attendee(event.id, attendee.id):
            return AdmissionError.ALREADY_ADMITTED

        remaining = event.capacity.remaining(self._ledger.count_for_event(event.id))
        if remaining <= 0:
            return AdmissionError.CAPACITY_EXCEEDED
        return None

    def _notify_owner(
        self, event: Event, attendee: Attendee, log: structlog.stdlib.BoundLogger
    ) -> None:
        try:
            self._notifier.send(build_owner_notification(event, attendee))
        except Exception:
            # The seat is already committed.
            log.exception("Owner notification failed", owner_id=event.owner_id)
