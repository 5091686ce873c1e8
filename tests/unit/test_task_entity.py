"""Tests for TaskEntity lifecycle rules (create, checklist replace, status set, field update)."""

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.entities.task import TaskEntity, validate_assignees
from app.domain.enums import TaskPriority, TaskStatus
from app.domain.exceptions import ValidationException
from app.domain.value_objects.checklist import ChecklistItem


def _task(**kwargs) -> TaskEntity:
    defaults = {"title": "Ship release", "created_by": "admin1", "assigned_to": ["u1"]}
    defaults.update(kwargs)
    return TaskEntity.create(**defaults)


class TestCreate:
    def test_defaults(self) -> None:
        task = _task()
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM
        assert task.progress == 0
        assert task.description == ""
        assert task.todo_checklist == []

    def test_checklist_derives_progress_and_status(self) -> None:
        task = _task(
            todo_checklist=[
                {"text": "a", "completed": False},
                {"text": "b", "completed": True},
            ]
        )
        assert task.progress == 50
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.completed_todo_count == 1

    def test_completed_status_without_checklist_forces_progress(self) -> None:
        task = _task(status=TaskStatus.COMPLETED)
        assert task.status == TaskStatus.COMPLETED
        assert task.progress == 100

    def test_scalar_assignee_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            _task(assigned_to="u1")
        assert exc_info.value.details == {"field": "assignedTo"}

    def test_missing_assignees_rejected(self) -> None:
        with pytest.raises(ValidationException):
            _task(assigned_to=None)

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationException, match="title"):
            _task(title="   ")


class TestReplaceChecklist:
    def test_all_done_completes_task(self) -> None:
        task = _task(todo_checklist=[{"text": "a"}, {"text": "b"}])
        task.replace_checklist([{"text": "a", "completed": True}, {"text": "b", "completed": True}])
        assert task.progress == 100
        assert task.status == TaskStatus.COMPLETED

    def test_status_follows_progress_down(self) -> None:
        task = _task(status=TaskStatus.COMPLETED)
        task.replace_checklist([{"text": "a", "completed": False}])
        assert task.progress == 0
        assert task.status == TaskStatus.PENDING

    def test_empty_checklist_resets_to_pending(self) -> None:
        task = _task(todo_checklist=[{"text": "a", "completed": True}])
        task.replace_checklist([])
        assert task.progress == 0
        assert task.status == TaskStatus.PENDING


class TestSetStatus:
    def test_completed_forces_checklist_and_progress(self) -> None:
        task = _task(todo_checklist=[{"text": "a"}, {"text": "b", "completed": True}])
        task.set_status(TaskStatus.COMPLETED)
        assert task.progress == 100
        assert all(item.completed for item in task.todo_checklist)

    def test_pending_leaves_completed_checklist_untouched(self) -> None:
        task = _task(todo_checklist=[{"text": "a", "completed": True}, {"text": "b", "completed": True}])
        task.set_status(TaskStatus.PENDING)
        assert task.status == TaskStatus.PENDING
        assert task.progress == 100
        assert task.todo_checklist == [
            ChecklistItem("a", True),
            ChecklistItem("b", True),
        ]

    def test_in_progress_leaves_progress(self) -> None:
        task = _task(todo_checklist=[{"text": "a"}])
        task.set_status(TaskStatus.IN_PROGRESS)
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.progress == 0

    def test_accepts_wire_value(self) -> None:
        task = _task()
        task.set_status("In Progress")
        assert task.status == TaskStatus.IN_PROGRESS

    def test_unknown_status_rejected(self) -> None:
        task = _task()
        with pytest.raises(ValidationException):
            task.set_status("Archived")


class TestApplyUpdates:
    def test_truthy_fields_overwrite(self) -> None:
        task = _task()
        due = datetime(2030, 1, 1, tzinfo=UTC)
        task.apply_updates(
            title="New title",
            description="Details",
            priority=TaskPriority.HIGH,
            due_date=due,
            attachments=["https://files/a.pdf"],
            assigned_to=["u2", "u3"],
        )
        assert task.title == "New title"
        assert task.description == "Details"
        assert task.priority == TaskPriority.HIGH
        assert task.due_date == due
        assert task.attachments == ["https://files/a.pdf"]
        assert task.assigned_to == ["u2", "u3"]

    def test_falsy_fields_keep_stored_values(self) -> None:
        task = _task(description="keep me", attachments=["a"])
        task.apply_updates(title="", description=None, attachments=[], assigned_to=[])
        assert task.title == "Ship release"
        assert task.description == "keep me"
        assert task.attachments == ["a"]
        assert task.assigned_to == ["u1"]

    def test_checklist_recomputes_progress(self) -> None:
        task = _task()
        task.apply_updates(todo_checklist=[{"text": "a", "completed": True}])
        assert task.progress == 100
        assert task.status == TaskStatus.COMPLETED

    def test_scalar_assignee_leaves_task_unchanged(self) -> None:
        task = _task()
        with pytest.raises(ValidationException):
            task.apply_updates(title="Changed", assigned_to="u2")
        assert task.title == "Ship release"
        assert task.assigned_to == ["u1"]


class TestOverdue:
    def test_past_due_and_not_completed(self) -> None:
        now = datetime(2025, 6, 1, tzinfo=UTC)
        task = _task(due_date=now - timedelta(days=1))
        assert task.is_overdue(now)
        task.set_status(TaskStatus.COMPLETED)
        assert not task.is_overdue(now)

    def test_no_due_date_is_not_overdue(self) -> None:
        assert not _task().is_overdue(datetime.now(UTC))


def test_validate_assignees_rejects_non_string_ids() -> None:
    with pytest.raises(ValidationException):
        validate_assignees(["u1", 5])
    assert validate_assignees(("a", "b")) == ["a", "b"]
