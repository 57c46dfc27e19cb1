# polyclinic/api/v1/outcome_errors.py
from typing import Any, NoReturn
from common.api_error import (
    AppError,
    ConflictError,
    DatabaseError,
    InvalidReferenceError,
    NotFoundError,
)
from polyclinic.core import Outcome, OutcomeStatus


def raise_for_outcome(outcome: Outcome[Any], entity: str) -> NoReturn:
    """Translate a non-success outcome into the matching AppError."""
    if outcome.status is OutcomeStatus.NOT_FOUND:
        raise NotFoundError(f"{entity} not found")
    if outcome.status is OutcomeStatus.CONFLICT:
        raise ConflictError(f"{entity} conflicts with an existing record")
    if outcome.status is OutcomeStatus.INVALID_REFERENCE:
        raise InvalidReferenceError(f"{entity} references a record that does not exist")
    if outcome.status is OutcomeStatus.ERROR:
        raise DatabaseError()
    raise AppError(f"Unexpected outcome {outcome.status.value} for {entity}")


__all__ = ["raise_for_outcome"]
