# working_calendar/errors.py
"""Error taxonomy for the task store and stats aggregator."""

from dataclasses import dataclass


class WorkingCalendarError(Exception):
    """Base exception for the working calendar core."""
    pass


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field."""
    field: str
    reason: str

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason}


class ValidationError(WorkingCalendarError):
    """Malformed or out-of-range input. Raised before any write."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.reason}" for e in self.errors)
        super().__init__(summary or "Validation failed")

    @classmethod
    def single(cls, field: str, reason: str) -> "ValidationError":
        return cls([FieldError(field, reason)])


class NotFoundError(WorkingCalendarError):
    """No task matches the (id, owner) filter.

    Absent tasks and tasks owned by someone else are reported the same way
    so callers cannot probe for ids belonging to other owners.
    """
    pass


class InternalError(WorkingCalendarError):
    """Persistence failure not attributable to caller input."""
    pass
