# polyclinic/core/outcomes.py
"""
Result kinds returned by every service operation.

Services never raise into the API layer; they return an ``Outcome`` whose
``status`` the routers translate into HTTP responses.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class OutcomeStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"
    FOUND = "found"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_REFERENCE = "invalid_reference"
    ERROR = "error"

    @property
    def is_success(self) -> bool:
        return self in (
            OutcomeStatus.CREATED,
            OutcomeStatus.UPDATED,
            OutcomeStatus.REMOVED,
            OutcomeStatus.FOUND,
        )


@dataclass(frozen=True)
class Outcome(Generic[T]):
    status: OutcomeStatus
    value: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.status.is_success

    @classmethod
    def created(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeStatus.CREATED, value)

    @classmethod
    def updated(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.UPDATED)

    @classmethod
    def removed(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.REMOVED)

    @classmethod
    def found(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeStatus.FOUND, value)

    @classmethod
    def not_found(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.NOT_FOUND)

    @classmethod
    def conflict(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.CONFLICT)

    @classmethod
    def invalid_reference(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.INVALID_REFERENCE)

    @classmethod
    def error(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.ERROR)


__all__ = ["OutcomeStatus", "Outcome"]
