# working_calendar/models.py
"""Task record and the request/response schemas built around it."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import StrictInt
from sqlalchemy import Index
from sqlmodel import Field, SQLModel


def _new_task_id() -> str:
    return uuid.uuid4().hex


class TaskBase(SQLModel):
    """Caller-supplied task fields."""
    date: str = Field(max_length=10)
    title: str = Field(max_length=200)
    progress: int = Field(default=0)
    category: str = Field(default="general", max_length=50)
    priority: int = Field(default=1)


class Task(TaskBase, table=True):
    """Task database table. One owner per task, fixed at creation."""
    __table_args__ = (Index("ix_task_owner_date", "owner_id", "date"),)

    id: str = Field(default_factory=_new_task_id, primary_key=True, max_length=32)
    owner_id: str = Field(index=True, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TaskCreate(SQLModel):
    """Schema for creating a task. Date and title are required."""
    date: str
    title: str
    progress: StrictInt = 0
    category: str = "general"
    priority: StrictInt = 1


class TaskUpdate(SQLModel):
    """Schema for a partial update. Only fields present in the body change."""
    date: Optional[str] = None
    title: Optional[str] = None
    progress: Optional[StrictInt] = None
    category: Optional[str] = None
    priority: Optional[StrictInt] = None


class ProgressUpdate(SQLModel):
    progress: StrictInt


class DailyStat(SQLModel):
    """Roll-up of every task recorded on one date."""
    date: str
    count: int
    average_progress: int


class MonthlyStats(SQLModel):
    total: int
    average_progress: int
    daily: list[DailyStat] = Field(default_factory=list)
