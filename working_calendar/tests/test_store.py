"""Tests for owner-scoped task persistence."""

from datetime import datetime, timezone

import pytest
from sqlmodel import SQLModel

from working_calendar import timestamps
from working_calendar.errors import InternalError, NotFoundError, ValidationError
from working_calendar.queries import list_all
from working_calendar.store import TaskStore

from conftest import OWNER_A, OWNER_B


class TestCreate:
    def test_defaults_are_applied(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "写周报")
        assert task.progress == 0
        assert task.category == "general"
        assert task.priority == 1
        assert task.owner_id == OWNER_A
        assert task.id

    def test_timestamps_start_equal(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Plan sprint")
        assert task.created_at == task.updated_at

    def test_round_trip_through_get_one(self, store: TaskStore):
        created = store.create(OWNER_A, "2024-05-02", "Review PR", 30, "work", 3)
        fetched = store.get_one(OWNER_A, created.id)
        assert (fetched.date, fetched.title, fetched.progress, fetched.category, fetched.priority) == (
            "2024-05-02", "Review PR", 30, "work", 3,
        )

    def test_title_is_trimmed(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "  Standup  ")
        assert task.title == "Standup"

    @pytest.mark.parametrize("kwargs,field", [
        ({"progress": 101}, "progress"),
        ({"progress": -5}, "progress"),
        ({"priority": 4}, "priority"),
        ({"priority": 0}, "priority"),
        ({"title": "  "}, "title"),
        ({"date": "05/01/2024"}, "date"),
    ])
    def test_invalid_input_is_rejected_before_write(self, store: TaskStore, session, kwargs, field):
        args = {"date": "2024-05-01", "title": "Task", **kwargs}
        with pytest.raises(ValidationError) as exc_info:
            store.create(OWNER_A, **args)
        assert [e.field for e in exc_info.value.errors] == [field]
        assert list_all(session, OWNER_A) == []

    def test_owner_is_required(self, store: TaskStore):
        with pytest.raises(ValidationError):
            store.create("", "2024-05-01", "Orphan")


class TestIsolation:
    def test_other_owner_cannot_read(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Private")
        with pytest.raises(NotFoundError):
            store.get_one(OWNER_B, task.id)

    def test_other_owner_cannot_update(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Private")
        task_id = task.id
        with pytest.raises(NotFoundError):
            store.update_partial(OWNER_B, task_id, {"title": "Hijacked"})
        with pytest.raises(NotFoundError):
            store.update_progress(OWNER_B, task_id, 100)
        fetched = store.get_one(OWNER_A, task_id)
        assert fetched.title == "Private"
        assert fetched.progress == 0

    def test_other_owner_cannot_delete(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Private")
        task_id = task.id
        with pytest.raises(NotFoundError):
            store.delete(OWNER_B, task_id)
        assert store.get_one(OWNER_A, task_id).title == "Private"


class TestUpdatePartial:
    def test_only_supplied_fields_change(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Write report", 10, "work", 2)
        updated = store.update_partial(OWNER_A, task.id, {"progress": 40})
        assert updated.progress == 40
        assert (updated.title, updated.date, updated.category, updated.priority) == (
            "Write report", "2024-05-01", "work", 2,
        )

    def test_multiple_fields(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Write report")
        updated = store.update_partial(
            OWNER_A, task.id, {"date": "2024-05-03", "title": "Write final report", "priority": 3}
        )
        assert updated.date == "2024-05-03"
        assert updated.title == "Write final report"
        assert updated.priority == 3

    def test_out_of_range_is_rejected_and_nothing_changes(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Write report", progress=20)
        task_id = task.id
        with pytest.raises(ValidationError):
            store.update_partial(OWNER_A, task_id, {"title": "New", "progress": 120})
        fetched = store.get_one(OWNER_A, task_id)
        assert fetched.title == "Write report"
        assert fetched.progress == 20

    def test_owner_cannot_be_reassigned(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Mine")
        with pytest.raises(ValidationError):
            store.update_partial(OWNER_A, task.id, {"owner_id": OWNER_B})

    def test_missing_task(self, store: TaskStore):
        with pytest.raises(NotFoundError):
            store.update_partial(OWNER_A, "does-not-exist", {"title": "x"})


class TestUpdateProgress:
    def test_changes_only_progress(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Gym", category="health", priority=2)
        updated = store.update_progress(OWNER_A, task.id, 75)
        assert updated.progress == 75
        assert (updated.title, updated.date, updated.category, updated.priority) == (
            "Gym", "2024-05-01", "health", 2,
        )

    @pytest.mark.parametrize("progress", [-1, 101])
    def test_rejects_out_of_range(self, store: TaskStore, progress):
        task = store.create(OWNER_A, "2024-05-01", "Gym")
        with pytest.raises(ValidationError) as exc_info:
            store.update_progress(OWNER_A, task.id, progress)
        assert exc_info.value.errors[0].field == "progress"

    def test_missing_task(self, store: TaskStore):
        with pytest.raises(NotFoundError):
            store.update_progress(OWNER_A, "does-not-exist", 10)


class TestTimestamps:
    def test_update_refreshes_updated_at_only(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Read")
        created_at, updated_at = task.created_at, task.updated_at
        updated = store.update_progress(OWNER_A, task.id, 10)
        assert updated.created_at == created_at
        assert updated.updated_at >= updated_at
        assert updated.updated_at >= updated.created_at

    def test_updated_at_never_moves_backwards(self, store: TaskStore, monkeypatch):
        task = store.create(OWNER_A, "2024-05-01", "Read")
        updated_at = task.updated_at
        monkeypatch.setattr(timestamps, "utcnow", lambda: datetime(2000, 1, 1, tzinfo=timezone.utc))
        updated = store.update_partial(OWNER_A, task.id, {"title": "Read more"})
        assert updated.title == "Read more"
        assert updated.updated_at == updated_at


class TestDelete:
    def test_delete_removes_task(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Temp")
        task_id = task.id
        store.delete(OWNER_A, task_id)
        with pytest.raises(NotFoundError):
            store.get_one(OWNER_A, task_id)

    def test_delete_nonexistent(self, store: TaskStore):
        with pytest.raises(NotFoundError):
            store.delete(OWNER_A, "does-not-exist")

    def test_delete_twice(self, store: TaskStore):
        task = store.create(OWNER_A, "2024-05-01", "Temp")
        task_id = task.id
        store.delete(OWNER_A, task_id)
        with pytest.raises(NotFoundError):
            store.delete(OWNER_A, task_id)


def test_storage_failure_surfaces_as_internal_error(store: TaskStore, engine):
    SQLModel.metadata.drop_all(engine)
    with pytest.raises(InternalError):
        store.get_one(OWNER_A, "anything")
