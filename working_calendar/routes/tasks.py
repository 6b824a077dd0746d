# working_calendar/routes/tasks.py
"""CRUD and listing endpoints for the caller's tasks."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from working_calendar.database import get_session
from working_calendar.models import ProgressUpdate, Task, TaskCreate, TaskUpdate
from working_calendar.owner import get_owner_id
from working_calendar.queries import list_all, list_by_date, list_by_range
from working_calendar.store import TaskStore

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_store(session: Session = Depends(get_session)) -> TaskStore:
    return TaskStore(session)


@router.get("/")
def list_tasks(
    date: Optional[str] = None,
    owner_id: str = Depends(get_owner_id),
    session: Session = Depends(get_session),
) -> list[Task]:
    """List tasks for one date, or all tasks when no date is given."""
    if date:
        return list_by_date(session, owner_id, date)
    return list_all(session, owner_id)


@router.get("/range")
def list_tasks_in_range(
    start: str,
    end: str,
    owner_id: str = Depends(get_owner_id),
    session: Session = Depends(get_session),
) -> list[Task]:
    """List tasks whose date falls within [start, end]."""
    return list_by_range(session, owner_id, start, end)


@router.get("/{task_id}")
def get_task(
    task_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TaskStore = Depends(get_store),
) -> Task:
    return store.get_one(owner_id, task_id)


@router.post("/", status_code=201)
def create_task(
    body: TaskCreate,
    owner_id: str = Depends(get_owner_id),
    store: TaskStore = Depends(get_store),
) -> Task:
    """Create a new task."""
    return store.create(owner_id, **body.model_dump())


@router.put("/{task_id}")
def update_task(
    task_id: str,
    body: TaskUpdate,
    owner_id: str = Depends(get_owner_id),
    store: TaskStore = Depends(get_store),
) -> Task:
    """Update an existing task. Only provided fields are changed."""
    return store.update_partial(owner_id, task_id, body.model_dump(exclude_unset=True))


@router.put("/{task_id}/progress")
def update_task_progress(
    task_id: str,
    body: ProgressUpdate,
    owner_id: str = Depends(get_owner_id),
    store: TaskStore = Depends(get_store),
) -> Task:
    return store.update_progress(owner_id, task_id, body.progress)


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TaskStore = Depends(get_store),
) -> dict:
    """Delete a task by ID."""
    store.delete(owner_id, task_id)
    return {"message": "Task deleted"}
