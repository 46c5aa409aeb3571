"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for a webinar Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AttendeeId:
    """Unique identifier for an Attendee."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AdmissionId:
    """Unique identifier for an Admission."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Positive integer number of seats."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value <= 0:
            raise ValueError("Capacity must be positive")

    def remaining(self, taken: int) -> int:
        return self.value - taken


@dataclass(frozen=True)
class EmailAddress:
    """Contact address of an attendee."""

    value: str

    def __post_init__(self) -> None:
        local, sep, domain = self.value.partition("@")
        if not sep or not local or not domain or "@" in domain:
            raise ValueError("Invalid email address")

    def __str__(self) -> str:
        return self.value
