# working_calendar/routes/stats.py
"""Progress statistics for the caller's tasks."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from working_calendar.database import get_session
from working_calendar.models import DailyStat, MonthlyStats
from working_calendar.owner import get_owner_id
from working_calendar.stats import daily_completion, monthly

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/monthly")
def monthly_stats(
    year: int,
    month: int,
    owner_id: str = Depends(get_owner_id),
    session: Session = Depends(get_session),
) -> MonthlyStats:
    """Task count and average progress for one month, with a per-day breakdown."""
    return monthly(session, owner_id, year, month)


@router.get("/daily-completion")
def daily_completion_stats(
    owner_id: str = Depends(get_owner_id),
    session: Session = Depends(get_session),
) -> list[DailyStat]:
    """Average progress for every date the caller has recorded."""
    return daily_completion(session, owner_id)
