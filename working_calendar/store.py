# working_calendar/store.py
"""Owner-scoped create/read/update/delete for task records.

Every statement filters on ``owner_id`` together with the task id, so a
task owned by someone else behaves exactly like a task that does not
exist. Mutations are single UPDATE/DELETE statements committed as one
unit; there is no read-modify-write window between callers.
"""

import logging
from typing import Any, Mapping

from sqlalchemy import delete, update
from sqlmodel import Session, select

from working_calendar.database import persistence_errors
from working_calendar.errors import NotFoundError, ValidationError
from working_calendar.models import Task
from working_calendar.timestamps import touch, utcnow
from working_calendar.validation import (
    DEFAULT_CATEGORY,
    PRIORITY_LOW,
    check_progress,
    validate_fields,
    validate_owner,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """Task persistence bound to one session.

    ``owner_id`` is a required positional argument on every method.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(
        self,
        owner_id: str,
        date: str,
        title: str,
        progress: int = 0,
        category: str = DEFAULT_CATEGORY,
        priority: int = PRIORITY_LOW,
    ) -> Task:
        """Validate and persist a new task with ``created_at == updated_at``."""
        owner_id = validate_owner(owner_id)
        fields = validate_fields({
            "date": date,
            "title": title,
            "progress": progress,
            "category": category,
            "priority": priority,
        })
        now = utcnow()
        task = Task(owner_id=owner_id, created_at=now, updated_at=now, **fields)
        with persistence_errors(self._session, "create task"):
            self._session.add(task)
            self._session.commit()
            self._session.refresh(task)
        logger.info("Created task %s for owner %s on %s", task.id, owner_id, task.date)
        return task

    def get_one(self, owner_id: str, task_id: str) -> Task:
        owner_id = validate_owner(owner_id)
        statement = select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        with persistence_errors(self._session, "load task"):
            task = self._session.exec(statement).first()
        if task is None:
            logger.debug("Task %s not found for owner %s", task_id, owner_id)
            raise NotFoundError("Task not found")
        return task

    def update_partial(self, owner_id: str, task_id: str, fields: Mapping[str, Any]) -> Task:
        """Apply only the supplied fields; everything else keeps its value."""
        owner_id = validate_owner(owner_id)
        return self._apply(owner_id, task_id, validate_fields(fields), "update task")

    def update_progress(self, owner_id: str, task_id: str, progress: int) -> Task:
        owner_id = validate_owner(owner_id)
        try:
            progress = check_progress(progress)
        except ValueError as exc:
            raise ValidationError.single("progress", str(exc)) from None
        return self._apply(owner_id, task_id, {"progress": progress}, "update task progress")

    def delete(self, owner_id: str, task_id: str) -> None:
        owner_id = validate_owner(owner_id)
        statement = delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        with persistence_errors(self._session, "delete task"):
            result = self._session.exec(statement)
            self._session.commit()
        if result.rowcount == 0:
            logger.debug("Delete of task %s matched nothing for owner %s", task_id, owner_id)
            raise NotFoundError("Task not found")
        logger.info("Deleted task %s for owner %s", task_id, owner_id)

    def _apply(self, owner_id: str, task_id: str, values: dict[str, Any], action: str) -> Task:
        statement = (
            update(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .values(**values, **touch())
            .execution_options(synchronize_session=False)
        )
        with persistence_errors(self._session, action):
            result = self._session.exec(statement)
            self._session.commit()
        if result.rowcount == 0:
            logger.debug("Update of task %s matched nothing for owner %s", task_id, owner_id)
            raise NotFoundError("Task not found")
        return self.get_one(owner_id, task_id)
