"""Domain error codes for the webinars module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ATTENDEE_NOT_FOUND = "ATTENDEE_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_ATTENDEE_ID = "INVALID_ATTENDEE_ID"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Webinar not found",
        )
        object.__setattr__(self, "event_id", event_id)


class AttendeeNotFoundError(DomainError):
    """Raised when an attendee is not found."""

    def __init__(self, attendee_id: str) -> None:
        super().__init__(
            code=ErrorCode.ATTENDEE_NOT_FOUND,
            message="Attendee not found",
        )
        object.__setattr__(self, "attendee_id", attendee_id)


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid webinar ID format",
        )


class InvalidAttendeeIdError(DomainError):
    """Raised when an attendee ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ATTENDEE_ID,
            message="Invalid attendee ID format",
        )


class InfrastructureError(Exception):
    """Base class for storage and delivery faults."""


class LedgerError(InfrastructureError):
    """Raised when the admission ledger cannot complete an operation."""


class DuplicateAdmissionError(LedgerError):
    """Raised when storage rejects a second admission for the same pair."""


class NotifierError(InfrastructureError):
    """Raised when a notification cannot be delivered."""
