"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_django_store.py -v
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime

import pytest
from django.conf import settings
from django.db import connection

from tests.factories import FIXED_NOW
from webinars import models
from webinars.domain import (
    Admission,
    AdmissionError,
    AttendeeId,
    EmailAddress,
    EventId,
)
from webinars.domain.errors import DuplicateAdmissionError
from webinars.notifiers import InMemoryNotifier
from webinars.services import AdmissionService
from webinars.stores.django_store import (
    DjangoAdmissionLedger,
    DjangoAttendeeStore,
    DjangoEventStore,
)


@pytest.fixture
def webinar_row() -> models.Webinar:
    return models.Webinar.objects.create(
        owner_id="organizer-1",
        title="Webinar Title",
        capacity=2,
        starts_at=datetime(2024, 1, 10, 10, 0, tzinfo=UTC),
        ends_at=datetime(2024, 1, 10, 11, 0, tzinfo=UTC),
    )


@pytest.fixture
def attendee_rows() -> list[models.Attendee]:
    return [
        models.Attendee.objects.create(email=f"user{i}@example.com", credential="password123")
        for i in range(1, 4)
    ]


@pytest.fixture
def django_ledger() -> DjangoAdmissionLedger:
    return DjangoAdmissionLedger()


@pytest.mark.django_db
class TestDjangoEventStore:
    """Tests for DjangoEventStore."""

    def test_get_event_converts_row(self, webinar_row):
        event = DjangoEventStore().get_event(EventId(value=webinar_row.id))

        assert event.title == "Webinar Title"
        assert event.capacity.value == 2
        assert event.owner_id == "organizer-1"

    def test_get_event_missing_returns_none(self):
        assert DjangoEventStore().get_event(EventId.new()) is None

    def test_event_exists(self, webinar_row):
        store = DjangoEventStore()
        assert store.event_exists(EventId(value=webinar_row.id))
        assert not store.event_exists(EventId.new())

    def test_list_events_ordered_by_start(self, webinar_row):
        earlier = models.Webinar.objects.create(
            owner_id="organizer-2",
            title="Earlier",
            capacity=5,
            starts_at=datetime(2024, 1, 5, 10, 0, tzinfo=UTC),
            ends_at=datetime(2024, 1, 5, 11, 0, tzinfo=UTC),
        )

        titles = [event.title for event in DjangoEventStore().list_events()]

        assert titles == [earlier.title, webinar_row.title]


@pytest.mark.django_db
class TestDjangoAttendeeStore:
    def test_get_attendee_converts_row(self, attendee_rows):
        row = attendee_rows[0]

        attendee = DjangoAttendeeStore().get_attendee(AttendeeId(value=row.id))

        assert attendee.email == EmailAddress("user1@example.com")

    def test_get_attendee_missing_returns_none(self):
        assert DjangoAttendeeStore().get_attendee(AttendeeId.new()) is None


@pytest.mark.django_db
class TestDjangoAdmissionLedger:
    """Tests for DjangoAdmissionLedger."""

    def test_append_then_read_back(self, django_ledger, webinar_row, attendee_rows):
        event_id = EventId(value=webinar_row.id)
        attendee_id = AttendeeId(value=attendee_rows[0].id)
        admission = Admission.create(event_id, attendee_id, FIXED_NOW)

        with django_ledger.lock_event(event_id):
            django_ledger.append(admission)

        assert django_ledger.count_for_event(event_id) == 1
        assert django_ledger.exists_for_event_and_attendee(event_id, attendee_id)
        assert django_ledger.list_for_event(event_id) == [admission]

    def test_duplicate_append_raises(self, django_ledger, webinar_row, attendee_rows):
        event_id = EventId(value=webinar_row.id)
        attendee_id = AttendeeId(value=attendee_rows[0].id)
        django_ledger.append(Admission.create(event_id, attendee_id, FIXED_NOW))

        with pytest.raises(DuplicateAdmissionError):
            django_ledger.append(Admission.create(event_id, attendee_id, FIXED_NOW))

        assert django_ledger.count_for_event(event_id) == 1

    def test_error_inside_critical_section_rolls_back(
        self, django_ledger, webinar_row, attendee_rows
    ):
        """Nothing appended inside a failed block survives."""
        event_id = EventId(value=webinar_row.id)
        admission = Admission.create(event_id, AttendeeId(value=attendee_rows[0].id), FIXED_NOW)

        with pytest.raises(RuntimeError):
            with django_ledger.lock_event(event_id):
                django_ledger.append(admission)
                raise RuntimeError("caller went away")

        assert django_ledger.count_for_event(event_id) == 0


@pytest.mark.django_db
class TestAdmissionServiceWithDjangoStores:
    """The admission protocol against the ORM-backed ledger."""

    @pytest.fixture
    def notifier(self) -> InMemoryNotifier:
        return InMemoryNotifier()

    @pytest.fixture
    def service(self, notifier) -> AdmissionService:
        return AdmissionService(DjangoEventStore(), DjangoAdmissionLedger(), notifier)

    def _attendee(self, row):
        return DjangoAttendeeStore().get_attendee(AttendeeId(value=row.id))

    def test_capacity_and_uniqueness(self, service, notifier, webinar_row, attendee_rows):
        event_id = EventId(value=webinar_row.id)
        first, second, third = (self._attendee(row) for row in attendee_rows)

        assert service.admit(event_id, first).ok
        assert service.admit(event_id, first).error is AdmissionError.ALREADY_ADMITTED
        assert service.admit(event_id, second).ok
        assert service.admit(event_id, third).error is AdmissionError.CAPACITY_EXCEEDED

        assert models.Admission.objects.filter(webinar=webinar_row).count() == 2
        assert [n.to for n in notifier.sent] == ["organizer-1", "organizer-1"]

    def test_unknown_event(self, service, notifier, attendee_rows):
        result = service.admit(EventId.new(), self._attendee(attendee_rows[0]))

        assert result.error is AdmissionError.EVENT_NOT_FOUND
        assert models.Admission.objects.count() == 0
        assert notifier.sent == []

    def test_admission_survives_notifier_failure(self, webinar_row, attendee_rows):
        service = AdmissionService(
            DjangoEventStore(), DjangoAdmissionLedger(), InMemoryNotifier(fail=True)
        )

        result = service.admit(EventId(value=webinar_row.id), self._attendee(attendee_rows[0]))

        assert result.ok
        assert models.Admission.objects.filter(pk=result.admission.id.value).exists()


class SlowDjangoLedger(DjangoAdmissionLedger):
    """Widens the window between the capacity read and the append."""

    def count_for_event(self, event_id):
        count = super().count_for_event(event_id)
        time.sleep(0.05)
        return count


def race(service, event_id, attendees):
    """Run one admit per attendee on its own thread, all released together."""
    barrier = threading.Barrier(len(attendees))

    def admit(attendee):
        try:
            barrier.wait()
            return service.admit(event_id, attendee)
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(attendees)) as pool:
        return list(pool.map(admit, attendees))


class TestDatabaseConfiguration:
    def test_sqlite_takes_writer_lock_at_begin(self):
        """SQLite transactions start IMMEDIATE so racing admissions queue, not fail."""
        database = settings.DATABASES["default"]
        if database["ENGINE"] != "django.db.backends.sqlite3":
            pytest.skip("row locks serialize admissions on this backend")

        assert database["OPTIONS"]["transaction_mode"] == "IMMEDIATE"
        assert database["TEST"]["NAME"]


@pytest.mark.django_db(transaction=True)
class TestConcurrentAdmissionsWithDjangoStores:
    """Racing callers against the ORM-backed ledger."""

    def test_capacity_is_never_oversold(self, webinar_row):
        """Ten racers for two seats: two admitted, the rest refused, none failed."""
        rows = [
            models.Attendee.objects.create(email=f"racer{i}@example.com", credential="x")
            for i in range(10)
        ]
        attendees = [DjangoAttendeeStore().get_attendee(AttendeeId(value=r.id)) for r in rows]
        notifier = InMemoryNotifier()
        service = AdmissionService(DjangoEventStore(), SlowDjangoLedger(), notifier)

        results = race(service, EventId(value=webinar_row.id), attendees)

        assert sum(result.ok for result in results) == 2
        assert {r.error for r in results if not r.ok} == {AdmissionError.CAPACITY_EXCEEDED}
        assert models.Admission.objects.filter(webinar=webinar_row).count() == 2
        assert len(notifier.sent) == 2

    def test_duplicate_racers_admit_once(self, webinar_row, attendee_rows):
        """The same attendee racing itself is admitted exactly once."""
        attendee = DjangoAttendeeStore().get_attendee(AttendeeId(value=attendee_rows[0].id))
        service = AdmissionService(DjangoEventStore(), SlowDjangoLedger(), InMemoryNotifier())

        results = race(service, EventId(value=webinar_row.id), [attendee] * 6)

        assert sum(result.ok for result in results) == 1
        assert {r.error for r in results if not r.ok} == {AdmissionError.ALREADY_ADMITTED}
        assert models.Admission.objects.filter(webinar=webinar_row).count() == 1
