"""Webinar service - read-side business logic.

Services:
- Depend only on interfaces (stores)
- Validate identifiers
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

from webinars.domain import Admission, Event, EventId
from webinars.domain.errors import EventNotFoundError, InvalidEventIdError
from webinars.stores.interfaces import AdmissionLedger, EventStore


def parse_event_id(event_id: str) -> EventId:
    """Parse a raw event ID.

    Raises:
        InvalidEventIdError: If the event_id is not a valid UUID.
    """
    try:
        return EventId.from_string(event_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidEventIdError() from exc


class WebinarService:
    """Service for webinar catalog operations."""

    def __init__(self, store: EventStore, ledger: AdmissionLedger) -> None:
        self._store = store
        self._ledger = ledger

    def list_events(self) -> list[Event]:
        """Return all webinars."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return a webinar by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def seats_remaining(self, event_id: str) -> int:
        """Return the number of free seats, never below zero.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        return max(event.capacity.remaining(self._ledger.count_for_event(event.id)), 0)

    def list_admissions(self, event_id: str) -> list[Admission]:
        """Return admissions for a webinar, oldest first.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        return self._ledger.list_for_event(event.id)
