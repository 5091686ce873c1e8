"""Task domain entity.

Holds the task lifecycle rules: progress/status derivation from the
checklist, forced completion from a direct status update, and the
merge-if-present field update used by admin edits.

Derivation is deliberately one-directional in each case:
- replacing the checklist recomputes progress and status;
- setting status to Completed forces the checklist and progress;
- setting any other status leaves checklist and progress untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import TaskPriority, TaskStatus
from app.domain.exceptions import ValidationException
from app.domain.value_objects.checklist import (
    ChecklistItem,
    build_checklist,
    compute_progress,
    status_for_progress,
)

_UNSET: Any = object()


def validate_assignees(value: Any) -> list[str]:
    """Return assignee ids as a list of strings; raise if value is not a list.

    Raises:
        ValidationException: If value is not a list/tuple of ids.
    """
    if not isinstance(value, (list, tuple)):
        raise ValidationException(
            "assignedTo must be an array of user IDs", field="assignedTo"
        )
    ids: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item:
            raise ValidationException(
                "assignedTo must contain user ID strings", field="assignedTo"
            )
        ids.append(item)
    return ids


@dataclass
class TaskEntity:
    """Domain entity for a task (business rules separate from persistence).

    Validation runs on construction. Persistence assigns id and timestamps.
    """

    id: str
    title: str
    created_by: str
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: datetime | None = None
    assigned_to: list[str] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)
    todo_checklist: list[ChecklistItem] = field(default_factory=list)
    progress: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task invariants. Raises ValidationException if invalid."""
        if not self.title or not self.title.strip():
            raise ValidationException("Task title is required", field="title")
        if not self.created_by:
            raise ValidationException("Task creator is required", field="createdBy")
        if not isinstance(self.assigned_to, list):
            raise ValidationException(
                "assignedTo must be an array of user IDs", field="assignedTo"
            )
        if not 0 <= self.progress <= 100:
            raise ValidationException("Progress must be between 0 and 100", field="progress")

    @classmethod
    def create(
        cls,
        *,
        title: str,
        created_by: str,
        assigned_to: Any,
        description: str | None = None,
        priority: TaskPriority | None = None,
        status: TaskStatus | None = None,
        due_date: datetime | None = None,
        attachments: Iterable[str] | None = None,
        todo_checklist: Iterable[ChecklistItem | Mapping[str, Any]] | None = None,
    ) -> "TaskEntity":
        """Build a new (unsaved) task with derived progress and status.

        A non-empty checklist derives progress and status exactly like a
        checklist update. Without one, status defaults to Pending and a
        supplied Completed status forces progress to 100.
        """
        task = cls(
            id="",
            title=title,
            created_by=created_by,
            description=description or "",
            priority=priority or TaskPriority.MEDIUM,
            status=TaskStatus.PENDING,
            due_date=due_date,
            assigned_to=validate_assignees(assigned_to),
            attachments=list(attachments or []),
        )
        checklist = build_checklist(todo_checklist)
        if checklist:
            task.replace_checklist(checklist)
        elif status is not None:
            task.set_status(status)
        return task

    def is_assigned(self, user_id: str) -> bool:
        """Return True if user_id is one of the task's assignees."""
        return user_id in self.assigned_to

    @property
    def completed_todo_count(self) -> int:
        """Number of completed checklist items."""
        return sum(1 for item in self.todo_checklist if item.completed)

    def is_overdue(self, now: datetime) -> bool:
        """Return True when not completed and the due date has passed."""
        return (
            self.status != TaskStatus.COMPLETED
            and self.due_date is not None
            and self.due_date < now
        )

    def replace_checklist(
        self, items: Iterable[ChecklistItem | Mapping[str, Any]]
    ) -> None:
        """Store a new checklist and recompute progress and status from it."""
        self.todo_checklist = build_checklist(items)
        self.progress = compute_progress(self.todo_checklist)
        self.status = status_for_progress(self.progress)

    def set_status(self, status: TaskStatus) -> None:
        """Set status directly.

        Completed forces every checklist item completed and progress to 100.
        Pending and In Progress leave checklist and progress as they are.
        """
        try:
            self.status = TaskStatus(status)
        except ValueError as e:
            raise ValidationException(str(e), field="status") from e
        if self.status == TaskStatus.COMPLETED:
            self.todo_checklist = [item.mark_completed() for item in self.todo_checklist]
            self.progress = 100

    def apply_updates(
        self,
        *,
        title: Any = _UNSET,
        description: Any = _UNSET,
        priority: Any = _UNSET,
        due_date: Any = _UNSET,
        attachments: Any = _UNSET,
        todo_checklist: Any = _UNSET,
        assigned_to: Any = _UNSET,
    ) -> None:
        """Merge-if-present field update.

        A field overwrites the stored value only when it is provided and
        truthy; None, "" and [] keep the existing value. assignedTo is
        validated before anything is changed so a bad value leaves the task
        untouched.
        """
        new_assignees: list[str] | None = None
        if assigned_to is not _UNSET and assigned_to:
            new_assignees = validate_assignees(assigned_to)
        new_checklist: list[ChecklistItem] | None = None
        if todo_checklist is not _UNSET and todo_checklist:
            new_checklist = build_checklist(todo_checklist)
        new_priority: TaskPriority | None = None
        if priority is not _UNSET and priority:
            try:
                new_priority = TaskPriority(priority)
            except ValueError as e:
                raise ValidationException(str(e), field="priority") from e

        if title is not _UNSET and title:
            self.title = title
        if description is not _UNSET and description:
            self.description = description
        if new_priority is not None:
            self.priority = new_priority
        if due_date is not _UNSET and due_date:
            self.due_date = due_date
        if attachments is not _UNSET and attachments:
            self.attachments = list(attachments)
        if new_checklist is not None:
            self.replace_checklist(new_checklist)
        if new_assignees is not None:
            self.assigned_to = new_assignees
