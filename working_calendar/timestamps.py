# working_calendar/timestamps.py
"""The single place that decides what ``updated_at`` becomes on a write."""

from datetime import datetime, timezone

from sqlalchemy import case

from working_calendar.models import Task


def utcnow() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


def touch(now: datetime | None = None) -> dict:
    """Return the ``updated_at`` assignment for an UPDATE statement.

    The new value is computed inside the statement as the later of the
    stored value and ``now``, so a backwards clock step can never move
    ``updated_at`` below ``created_at`` or a previous update.
    """
    if now is None:
        now = utcnow()
    return {
        "updated_at": case(
            (Task.updated_at > now, Task.updated_at),
            else_=now,
        )
    }
