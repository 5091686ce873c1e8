"""DTOs for task use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskCreate:
    """Input for TaskService.create_task. assigned_to is validated by the entity."""

    title: str
    assigned_to: Any
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    attachments: list[str] = field(default_factory=list)
    todo_checklist: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class AssigneeSummary:
    """Public projection of an assigned user."""

    id: str
    name: str
    email: str
    profile_image_url: str | None = None


@dataclass(frozen=True)
class TaskView:
    """Task with its assignees resolved to user summaries."""

    task: TaskEntity
    assignees: list[AssigneeSummary] = field(default_factory=list)

    @property
    def completed_todo_count(self) -> int:
        return self.task.completed_todo_count


@dataclass(frozen=True)
class StatusSummary:
    """Counts shown next to a task listing.

    all ignores the status filter; the other counts honour it.
    """

    all: int
    pending_tasks: int
    in_progress_tasks: int
    completed_tasks: int


@dataclass(frozen=True)
class TaskListResult:
    tasks: list[TaskView]
    status_summary: StatusSummary
