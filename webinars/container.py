"""Wiring of services to their Django-backed collaborators."""

from webinars.notifiers import DjangoMailNotifier
from webinars.services import AdmissionService, WebinarService
from webinars.stores.django_store import (
    DjangoAdmissionLedger,
    DjangoAttendeeStore,
    DjangoEventStore,
)
from webinars.stores.interfaces import AttendeeStore


def build_admission_service() -> AdmissionService:
    return AdmissionService(
        event_store=DjangoEventStore(),
        ledger=DjangoAdmissionLedger(),
        notifier=DjangoMailNotifier(),
    )


def build_webinar_service() -> WebinarService:
    return WebinarService(store=DjangoEventStore(), ledger=DjangoAdmissionLedger())


def build_attendee_store() -> AttendeeStore:
    return DjangoAttendeeStore()
