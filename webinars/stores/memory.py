"""In-memory store implementations.

Thread-safe, so they can back concurrent admission tests and local wiring.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from webinars.domain import Admission, Attendee, AttendeeId, Event, EventId
from webinars.domain.errors import DuplicateAdmissionError
from webinars.stores.interfaces import AdmissionLedger, AttendeeStore, EventStore


class InMemoryEventStore(EventStore):
    """Dict-backed event store."""

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: dict[EventId, Event] = {event.id: event for event in events}
        self._lock = threading.Lock()

    def add(self, event: Event) -> None:
        with self._lock:
            self._events[event.id] = event

    def list_events(self) -> list[Event]:
        with self._lock:
            events = list(self._events.values())
        return sorted(events, key=lambda event: event.starts_at)

    def get_event(self, event_id: EventId) -> Event | None:
        with self._lock:
            return self._events.get(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        with self._lock:
            return event_id in self._events


class InMemoryAttendeeStore(AttendeeStore):
    """Dict-backed attendee store."""

    def __init__(self, attendees: Iterable[Attendee] = ()) -> None:
        self._attendees: dict[AttendeeId, Attendee] = {a.id: a for a in attendees}
        self._lock = threading.Lock()

    def add(self, attendee: Attendee) -> None:
        with self._lock:
            self._attendees[attendee.id] = attendee

    def get_attendee(self, attendee_id: AttendeeId) -> Attendee | None:
        with self._lock:
            return self._attendees.get(attendee_id)


class InMemoryAdmissionLedger(AdmissionLedger):
    """List-backed ledger with one lock per event.

    A per-event lock lives only while some caller holds or waits on it, so
    lookups for unknown events do not accumulate locks.
    """

    def __init__(self) -> None:
        self._admissions: list[Admission] = []
        self._records_lock = threading.Lock()
        # event id -> (lock, number of callers holding or waiting on it)
        self._event_locks: dict[EventId, tuple[threading.Lock, int]] = {}
        self._registry_lock = threading.Lock()

    def _acquire_slot(self, event_id: EventId) -> threading.Lock:
        with self._registry_lock:
            lock, users = self._event_locks.get(event_id, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._event_locks[event_id] = (lock, users + 1)
            return lock

    def _release_slot(self, event_id: EventId) -> None:
        with self._registry_lock:
            lock, users = self._event_locks[event_id]
            if users == 1:
                del self._event_locks[event_id]
            else:
                self._event_locks[event_id] = (lock, users - 1)

    @property
    def active_event_locks(self) -> int:
        with self._registry_lock:
            return len(self._event_locks)

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[None]:
        lock = self._acquire_slot(event_id)
        try:
            with lock:
                yield
        finally:
            self._release_slot(event_id)

    def count_for_event(self, event_id: EventId) -> int:
        with self._records_lock:
            return sum(1 for a in self._admissions if a.event_id == event_id)

    def exists_for_event_and_attendee(
        self, event_id: EventId, attendee_id: AttendeeId
    ) -> bool:
        with self._records_lock:
            return any(
                a.event_id == event_id and a.attendee_id == attendee_id
                for a in self._admissions
            )

    def append(self, admission: Admission) -> None:
        with self._records_lock:
            for existing in self._admissions:
                if (
                    existing.event_id == admission.event_id
                    and existing.attendee_id == admission.attendee_id
                ):
                    raise DuplicateAdmissionError(
                        f"Attendee {admission.attendee_id} already admitted to {admission.event_id}"
                    )
            self._admissions.append(admission)

    def list_for_event(self, event_id: EventId) -> list[Admission]:
        with self._records_lock:
            admissions = [a for a in self._admissions if a.event_id == event_id]
        return sorted(admissions, key=lambda a: a.created_at)
