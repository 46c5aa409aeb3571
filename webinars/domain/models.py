"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in webinars/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Self

from webinars.domain.value_objects import (
    AdmissionId,
    AttendeeId,
    Capacity,
    EmailAddress,
    EventId,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of a webinar."""

    id: EventId
    owner_id: str
    title: str
    capacity: Capacity
    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        if self.ends_at <= self.starts_at:
            raise ValueError("Event must end after it starts")


@dataclass(frozen=True)
class Attendee:
    """Domain representation of a prospective participant."""

    id: AttendeeId
    email: EmailAddress
    credential: str = field(repr=False)


@dataclass(frozen=True)
class Admission:
    """A seat taken by one attendee at one event."""

    id: AdmissionId
    event_id: EventId
    attendee_id: AttendeeId
    created_at: datetime

    @classmethod
    def create(cls, event_id: EventId, attendee_id: AttendeeId, now: datetime) -> Self:
        return cls(
            id=AdmissionId.new(),
            event_id=event_id,
            attendee_id=attendee_id,
            created_at=now,
        )


@dataclass(frozen=True)
class Notification:
    """One-way message delivered to an event owner."""

    to: str
    subject: str
    body: str
