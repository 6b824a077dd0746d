# working_calendar/validation.py
"""Field checks applied by the store before anything is written.

Each ``check_*`` function returns the normalized value or raises
``ValueError`` with a human-readable reason. ``validate_fields`` runs the
checks for a mapping of fields and reports every failure at once.
"""

import re
from datetime import date as date_type
from typing import Any, Mapping

from working_calendar.errors import FieldError, ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

TITLE_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50
DEFAULT_CATEGORY = "general"

PROGRESS_MIN, PROGRESS_MAX = 0, 100
PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH = 1, 2, 3
PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

MIN_STATS_YEAR, MAX_STATS_YEAR = 1970, 9999


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as priority 1
    return isinstance(value, int) and not isinstance(value, bool)


def check_date(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError("date is required")
    if not DATE_PATTERN.match(value):
        raise ValueError("date must use the YYYY-MM-DD format")
    try:
        date_type.fromisoformat(value)
    except ValueError:
        raise ValueError("date is not a valid calendar day") from None
    return value


def check_title(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("title is required")
    title = value.strip()
    if not title:
        raise ValueError("title must not be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def check_progress(value: Any) -> int:
    if not _is_int(value):
        raise ValueError("progress must be an integer")
    if not PROGRESS_MIN <= value <= PROGRESS_MAX:
        raise ValueError(f"progress must be between {PROGRESS_MIN} and {PROGRESS_MAX}")
    return value


def check_priority(value: Any) -> int:
    if not _is_int(value) or value not in PRIORITIES:
        raise ValueError("priority must be 1 (low), 2 (medium) or 3 (high)")
    return value


def check_category(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("category must be a string")
    category = value.strip()
    if len(category) > CATEGORY_MAX_LENGTH:
        raise ValueError(f"category must be at most {CATEGORY_MAX_LENGTH} characters")
    return category or DEFAULT_CATEGORY


FIELD_CHECKS = {
    "date": check_date,
    "title": check_title,
    "progress": check_progress,
    "category": check_category,
    "priority": check_priority,
}

UPDATABLE_FIELDS = frozenset(FIELD_CHECKS)


def validate_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalize a mapping of task fields.

    Keys outside ``UPDATABLE_FIELDS`` are rejected, so identity and
    timestamp columns can never be written through this path.
    """
    errors: list[FieldError] = []
    cleaned: dict[str, Any] = {}
    for name, value in fields.items():
        check = FIELD_CHECKS.get(name)
        if check is None:
            errors.append(FieldError(name, "field cannot be set"))
            continue
        try:
            cleaned[name] = check(value)
        except ValueError as exc:
            errors.append(FieldError(name, str(exc)))
    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_owner(owner_id: Any) -> str:
    if not isinstance(owner_id, str) or not owner_id.strip():
        raise ValidationError.single("owner_id", "owner is required")
    return owner_id


def validate_day(field: str, value: Any) -> str:
    """Run ``check_date`` for a query parameter, reporting it under ``field``."""
    try:
        return check_date(value)
    except ValueError as exc:
        raise ValidationError.single(field, str(exc)) from None


def validate_month(year: Any, month: Any) -> tuple[int, int]:
    errors = []
    if not _is_int(year) or not MIN_STATS_YEAR <= year <= MAX_STATS_YEAR:
        errors.append(FieldError(
            "year", f"year must be between {MIN_STATS_YEAR} and {MAX_STATS_YEAR}"
        ))
    if not _is_int(month) or not 1 <= month <= 12:
        errors.append(FieldError("month", "month must be between 1 and 12"))
    if errors:
        raise ValidationError(errors)
    return year, month
