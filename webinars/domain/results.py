"""Typed outcomes of an admission attempt.

Expected business outcomes are returned, not raised. Exceptions are reserved
for infrastructure faults (see domain/errors.py).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from webinars.domain.models import Admission


class AdmissionError(Enum):
    """Reasons an admission is refused."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ALREADY_ADMITTED = "ALREADY_ADMITTED"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    AdmissionError.EVENT_NOT_FOUND: "Webinar not found",
    AdmissionError.ALREADY_ADMITTED: "Attendee is already registered for this webinar",
    AdmissionError.CAPACITY_EXCEEDED: "Webinar has no seats left",
}


@dataclass(frozen=True)
class AdmissionResult:
    """Either the recorded admission or the reason it was refused."""

    admission: Admission | None = None
    error: AdmissionError | None = None

    def __post_init__(self) -> None:
        if (self.admission is None) == (self.error is None):
            raise ValueError("AdmissionResult needs exactly one of admission or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, admission: Admission) -> Self:
        return cls(admission=admission)

    @classmethod
    def failure(cls, error: AdmissionError) -> Self:
        return cls(error=error)
