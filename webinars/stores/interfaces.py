"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from webinars.domain import Admission, Attendee, AttendeeId, Event, EventId


class EventStore(ABC):
    """Interface for webinar lookups. Read-only for the admission core."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class AttendeeStore(ABC):
    """Interface for attendee lookups."""

    @abstractmethod
    def get_attendee(self, attendee_id: AttendeeId) -> Attendee | None:
        """Return an attendee by ID, or None if not found."""
        ...


class AdmissionLedger(ABC):
    """Authoritative, append-only record of admissions.

    Reads used for admission decisions must happen inside ``lock_event`` for
    the same event, together with the append they guard. Leaving the block
    makes the append durable.
    """

    @abstractmethod
    def lock_event(self, event_id: EventId) -> AbstractContextManager[None]:
        """Return a context manager serializing admissions for one event.

        Different events must never share the critical section.
        """
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        """Return the number of admissions recorded for an event."""
        ...

    @abstractmethod
    def exists_for_event_and_attendee(
        self, event_id: EventId, attendee_id: AttendeeId
    ) -> bool:
        """Check whether the attendee already holds a seat at the event."""
        ...

    @abstractmethod
    def append(self, admission: Admission) -> None:
        """Record an admission.

        Raises:
            DuplicateAdmissionError: If storage already holds the pair.
            LedgerError: If the admission could not be recorded.
        """
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Admission]:
        """Return admissions for an event, ordered by created_at ascending."""
        ...
