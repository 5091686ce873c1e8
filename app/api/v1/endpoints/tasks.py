"""Tasks API: dashboards, role-scoped listing, admin CRUD and assignee progress updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_dashboard_use_case,
    get_task_service,
    require_action,
)
from app.application.dtos.task import TaskCreate
from app.application.dtos.user import UserResult
from app.application.services import Action
from app.application.use_cases import GetDashboardDataUseCase, TaskService
from app.core.limiter import limit_writes
from app.domain.enums import TaskStatus
from app.schemas.common import MessageResponse
from app.schemas.dashboard import DashboardResponse
from app.schemas.task import (
    TaskChecklistRequest,
    TaskCreateRequest,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)

router = APIRouter()

TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


@router.get("/dashboard-data", response_model=DashboardResponse)
async def get_dashboard_data(
    current_user: CurrentUser,
    dashboard: Annotated[GetDashboardDataUseCase, Depends(get_dashboard_use_case)],
):
    """Statistics, chart maps and recent tasks across all tasks."""
    return DashboardResponse.from_result(await dashboard.get_dashboard_data())


@router.get("/user-dashboard-data", response_model=DashboardResponse)
async def get_user_dashboard_data(
    current_user: CurrentUser,
    dashboard: Annotated[GetDashboardDataUseCase, Depends(get_dashboard_use_case)],
):
    """Statistics, chart maps and recent tasks for tasks assigned to the caller."""
    return DashboardResponse.from_result(
        await dashboard.get_user_dashboard_data(current_user)
    )


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: CurrentUser,
    task_service: TaskServiceDep,
    status: Annotated[TaskStatus | None, Query()] = None,
):
    """All tasks for admins, assigned tasks for members; optional ?status= filter."""
    return TaskListResponse.from_result(
        await task_service.list_tasks(current_user, status)
    )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, current_user: CurrentUser, task_service: TaskServiceDep):
    """Return one task (admin, or a member it is assigned to)."""
    return TaskResponse.from_view(await task_service.get_task(current_user, task_id))


@router.post("", response_model=TaskMutationResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    current_user: Annotated[UserResult, Depends(require_action(Action.TASK_CREATE))],
    task_service: TaskServiceDep,
):
    """Create a task (admin only). assignedTo must be an array of user IDs."""
    view = await task_service.create_task(
        current_user,
        TaskCreate(
            title=body.title,
            assigned_to=body.assigned_to,
            description=body.description,
            priority=body.priority,
            status=body.status,
            due_date=body.due_date,
            attachments=body.attachments,
            todo_checklist=[item.model_dump() for item in body.todo_checklist],
        ),
    )
    return TaskMutationResponse.from_view(view, "Task created successfully")


@router.put("/{task_id}", response_model=TaskMutationResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """Update task fields (admin only). Empty or missing fields keep stored values."""
    view = await task_service.update_task(
        current_user, task_id, **body.model_dump(exclude_unset=True)
    )
    return TaskMutationResponse.from_view(view, "Task updated successfully")


@router.delete("/{task_id}", response_model=MessageResponse)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    current_user: Annotated[UserResult, Depends(require_action(Action.TASK_DELETE))],
    task_service: TaskServiceDep,
):
    """Hard delete a task (admin only)."""
    await task_service.delete_task(current_user, task_id)
    return MessageResponse(message="Task deleted successfully")


@router.put("/{task_id}/status", response_model=TaskMutationResponse)
@limit_writes
async def update_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusRequest,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """Set status (admin or assignee). Completed marks every checklist item done."""
    view = await task_service.update_status(current_user, task_id, body.status)
    return TaskMutationResponse.from_view(view, "Task status updated")


@router.put("/{task_id}/todo", response_model=TaskMutationResponse)
@limit_writes
async def update_task_checklist(
    request: Request,
    task_id: str,
    body: TaskChecklistRequest,
    current_user: CurrentUser,
    task_service: TaskServiceDep,
):
    """Replace the checklist (admin or assignee); progress and status are recomputed."""
    view = await task_service.update_checklist(current_user, task_id, body.todo_checklist)
    return TaskMutationResponse.from_view(view, "Task checklist updated")
