"""Task API schemas.

assignedTo is accepted as any JSON value so a scalar reaches the domain
check and is answered with a 400 validation error instead of a 422.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.application.dtos.task import StatusSummary, TaskListResult, TaskView
from app.domain.enums import TaskPriority, TaskStatus
from app.schemas.common import CamelModel


class ChecklistItemSchema(CamelModel):
    text: str = ""
    completed: bool = False


class TaskCreateRequest(CamelModel):
    """Request body for POST /tasks."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    assigned_to: Any = None
    attachments: list[str] = Field(default_factory=list)
    todo_checklist: list[ChecklistItemSchema] = Field(default_factory=list)


class TaskUpdateRequest(CamelModel):
    """Request body for PUT /tasks/{id}. Empty or missing fields keep stored values."""

    title: str | None = None
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to: Any = None
    attachments: list[str] | None = None
    todo_checklist: list[ChecklistItemSchema] | None = None

    @field_validator("priority", "due_date", mode="before")
    @classmethod
    def _blank_keeps_stored(cls, v: Any) -> Any:
        return None if v == "" else v


class TaskStatusRequest(CamelModel):
    """Missing or blank status re-applies the stored one."""

    status: TaskStatus | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _blank_is_missing(cls, v: Any) -> Any:
        return None if v == "" else v


class TaskChecklistRequest(CamelModel):
    todo_checklist: Any = None


class AssigneeResponse(CamelModel):
    id: str
    name: str
    email: str
    profile_image_url: str | None = None


class TaskResponse(CamelModel):
    """Task with resolved assignees and completed checklist count."""

    id: str
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    due_date: datetime | None = None
    assigned_to: list[AssigneeResponse]
    created_by: str
    attachments: list[str]
    todo_checklist: list[ChecklistItemSchema]
    progress: int
    completed_todo_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_view(cls, view: TaskView) -> "TaskResponse":
        task = view.task
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            due_date=task.due_date,
            assigned_to=[AssigneeResponse.model_validate(a) for a in view.assignees],
            created_by=task.created_by,
            attachments=task.attachments,
            todo_checklist=[ChecklistItemSchema.model_validate(i) for i in task.todo_checklist],
            progress=task.progress,
            completed_todo_count=view.completed_todo_count,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskMutationResponse(CamelModel):
    """Confirmation message plus the task after the change."""

    message: str
    task: TaskResponse

    @classmethod
    def from_view(cls, view: TaskView, message: str) -> "TaskMutationResponse":
        return cls(message=message, task=TaskResponse.from_view(view))


class StatusSummaryResponse(CamelModel):
    all: int
    pending_tasks: int
    in_progress_tasks: int
    completed_tasks: int


class TaskListResponse(CamelModel):
    """Response for GET /tasks."""

    tasks: list[TaskResponse]
    status_summary: StatusSummaryResponse

    @classmethod
    def from_result(cls, result: TaskListResult) -> "TaskListResponse":
        summary: StatusSummary = result.status_summary
        return cls(
            tasks=[TaskResponse.from_view(v) for v in result.tasks],
            status_summary=StatusSummaryResponse.model_validate(summary),
        )
