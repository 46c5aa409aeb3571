from webinars.domain.models import Admission, Attendee, Event, Notification
from webinars.domain.results import AdmissionError, AdmissionResult
from webinars.domain.value_objects import (
    AdmissionId,
    AttendeeId,
    Capacity,
    EmailAddress,
    EventId,
)

__all__ = [
    "Event",
    "Attendee",
    "Admission",
    "Notification",
    "AdmissionError",
    "AdmissionResult",
    "EventId",
    "AttendeeId",
    "AdmissionId",
    "Capacity",
    "EmailAddress",
]
