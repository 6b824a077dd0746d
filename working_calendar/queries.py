# working_calendar/queries.py
"""Date-based task listings, always scoped to one owner.

Canonical ``YYYY-MM-DD`` strings sort the same way as the days they name,
so range filters compare the stored strings directly.
"""

from sqlmodel import Session, select

from working_calendar.database import persistence_errors
from working_calendar.models import Task
from working_calendar.validation import validate_day, validate_owner


def _owned(owner_id: str):
    return select(Task).where(Task.owner_id == validate_owner(owner_id))


def _ordered(session: Session, statement) -> list[Task]:
    statement = statement.order_by(Task.date, Task.created_at)
    with persistence_errors(session, "list tasks"):
        return list(session.exec(statement).all())


def list_all(session: Session, owner_id: str) -> list[Task]:
    """Every task of the owner, by date then creation time."""
    return _ordered(session, _owned(owner_id))


def list_by_date(session: Session, owner_id: str, date: str) -> list[Task]:
    date = validate_day("date", date)
    return _ordered(session, _owned(owner_id).where(Task.date == date))


def list_by_range(session: Session, owner_id: str, start: str, end: str) -> list[Task]:
    """Tasks with ``start <= date <= end``. An inverted range is simply empty."""
    start = validate_day("start", start)
    end = validate_day("end", end)
    statement = _owned(owner_id).where(Task.date >= start, Task.date <= end)
    return _ordered(session, statement)
