# working_calendar/stats.py
"""Monthly and per-day progress roll-ups.

Grouping happens in Python over the owner's fetched tasks, which keeps the
rounding rule identical for every backend.
"""

import calendar
import logging
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sqlmodel import Session

from working_calendar.models import DailyStat, MonthlyStats, Task
from working_calendar.queries import list_all, list_by_range
from working_calendar.validation import validate_month

logger = logging.getLogger(__name__)


def round_half_up(value: Decimal | float | int) -> int:
    """Round to the nearest integer with exact halves going up (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def average_progress(total_progress: int, count: int) -> int:
    """Rounded mean progress; zero when there is nothing to average."""
    if count == 0:
        return 0
    return round_half_up(Decimal(total_progress) / Decimal(count))


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """First and last canonical day of a month, leap years included."""
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"


def summarize_by_date(tasks: Iterable[Task]) -> list[DailyStat]:
    """Group tasks by their date string and reduce each group to count and mean."""
    groups: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for task in tasks:
        group = groups[task.date]
        group[0] += 1
        group[1] += task.progress
    return [
        DailyStat(date=date, count=count, average_progress=average_progress(total, count))
        for date, (count, total) in sorted(groups.items())
    ]


def monthly(session: Session, owner_id: str, year: int, month: int) -> MonthlyStats:
    year, month = validate_month(year, month)
    start, end = month_bounds(year, month)
    tasks = list_by_range(session, owner_id, start, end)
    total = len(tasks)
    logger.debug("Monthly stats for %s %04d-%02d over %d tasks", owner_id, year, month, total)
    return MonthlyStats(
        total=total,
        average_progress=average_progress(sum(t.progress for t in tasks), total),
        daily=summarize_by_date(tasks),
    )


def daily_completion(session: Session, owner_id: str) -> list[DailyStat]:
    """Average progress for every date the owner has recorded, ascending."""
    return summarize_by_date(list_all(session, owner_id))
