"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from tests.factories import FIXED_NOW, make_attendee, make_event
from webinars.domain import Attendee, Event
from webinars.notifiers import InMemoryNotifier
from webinars.services import AdmissionService, WebinarService
from webinars.stores.memory import (
    InMemoryAdmissionLedger,
    InMemoryAttendeeStore,
    InMemoryEventStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def webinar() -> Event:
    return make_event(capacity=2)


@pytest.fixture
def event_store(webinar: Event) -> InMemoryEventStore:
    return InMemoryEventStore([webinar])


@pytest.fixture
def attendee_store() -> InMemoryAttendeeStore:
    return InMemoryAttendeeStore()


@pytest.fixture
def ledger() -> InMemoryAdmissionLedger:
    return InMemoryAdmissionLedger()


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def admission_service(
    event_store: InMemoryEventStore,
    ledger: InMemoryAdmissionLedger,
    notifier: InMemoryNotifier,
) -> AdmissionService:
    return AdmissionService(event_store, ledger, notifier, clock=lambda: FIXED_NOW)


@pytest.fixture
def webinar_service(
    event_store: InMemoryEventStore, ledger: InMemoryAdmissionLedger
) -> WebinarService:
    return WebinarService(event_store, ledger)


@pytest.fixture
def user() -> Attendee:
    return make_attendee("user@example.com")
