"""Django ORM implementations of the stores.

Each method queries the ORM and converts rows to domain models.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, transaction

from webinars import models
from webinars.domain import (
    Admission,
    AdmissionId,
    Attendee,
    AttendeeId,
    Capacity,
    EmailAddress,
    Event,
    EventId,
)
from webinars.domain.errors import DuplicateAdmissionError, LedgerError
from webinars.stores.interfaces import AdmissionLedger, AttendeeStore, EventStore


def _to_event(row: models.Webinar) -> Event:
    return Event(
        id=EventId(value=row.id),
        owner_id=row.owner_id,
        title=row.title,
        capacity=Capacity(row.capacity),
        starts_at=row.starts_at,
        ends_at=row.ends_at,
    )


def _to_attendee(row: models.Attendee) -> Attendee:
    return Attendee(
        id=AttendeeId(value=row.id),
        email=EmailAddress(row.email),
        credential=row.credential,
    )


def _to_admission(row: models.Admission) -> Admission:
    return Admission(
        id=AdmissionId(value=row.id),
        event_id=EventId(value=row.webinar_id),
        attendee_id=AttendeeId(value=row.attendee_id),
        created_at=row.created_at,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def list_events(self) -> list[Event]:
        return [_to_event(row) for row in models.Webinar.objects.order_by("starts_at")]

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Webinar.objects.filter(pk=event_id.value).first()
        return _to_event(row) if row is not None else None

    def event_exists(self, event_id: EventId) -> bool:
        return models.Webinar.objects.filter(pk=event_id.value).exists()


class DjangoAttendeeStore(AttendeeStore):
    """Database-backed attendee store using Django ORM."""

    def get_attendee(self, attendee_id: AttendeeId) -> Attendee | None:
        row = models.Attendee.objects.filter(pk=attendee_id.value).first()
        return _to_attendee(row) if row is not None else None


class DjangoAdmissionLedger(AdmissionLedger):
    """Database-backed ledger.

    The critical section is a transaction that commits when the block exits.
    How it serializes depends on the backend:

    - PostgreSQL/MySQL: ``select_for_update`` holds a row lock on the webinar,
      so admissions for one webinar queue while other webinars proceed in
      parallel.
    - SQLite: row locks do not exist. The connection must be configured with
      ``transaction_mode = "IMMEDIATE"`` (see config/settings.py) so BEGIN takes
      the database-wide writer lock; all admissions are then serialized, which
      is stricter than per-webinar but never oversells.
    """

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[None]:
        try:
            with transaction.atomic():
                # Evaluated for its row lock; a missing webinar locks nothing.
                list(
                    models.Webinar.objects.select_for_update()
                    .filter(pk=event_id.value)
                    .values_list("pk", flat=True)
                )
                yield
        except DatabaseError as exc:
            raise LedgerError("Could not commit admission transaction") from exc

    def count_for_event(self, event_id: EventId) -> int:
        return models.Admission.objects.filter(webinar_id=event_id.value).count()

    def exists_for_event_and_attendee(
        self, event_id: EventId, attendee_id: AttendeeId
    ) -> bool:
        return models.Admission.objects.filter(
            webinar_id=event_id.value, attendee_id=attendee_id.value
        ).exists()

    def append(self, admission: Admission) -> None:
        try:
            # Savepoint keeps the enclosing transaction usable after a conflict.
            with transaction.atomic():
                models.Admission.objects.create(
                    id=admission.id.value,
                    webinar_id=admission.event_id.value,
                    attendee_id=admission.attendee_id.value,
                    created_at=admission.created_at,
                )
        except IntegrityError as exc:
            if self.exists_for_event_and_attendee(admission.event_id, admission.attendee_id):
                raise DuplicateAdmissionError(
                    f"Attendee {admission.attendee_id} already admitted to {admission.event_id}"
                ) from exc
            raise LedgerError("Admission rejected by storage") from exc
        except DatabaseError as exc:
            raise LedgerError("Could not record admission") from exc

    def list_for_event(self, event_id: EventId) -> list[Admission]:
        rows = models.Admission.objects.filter(webinar_id=event_id.value).order_by(
            "created_at"
        )
        return [_to_admission(row) for row in rows]
