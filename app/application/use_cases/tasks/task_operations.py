"""Task operations: create, read, list, update, progress and delete.

Every operation takes the authenticated principal and consults
AuthorizationPolicy; derivation of progress and status lives on TaskEntity.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from app.application.dtos.task import (
    AssigneeSummary,
    StatusSummary,
    TaskCreate,
    TaskListResult,
    TaskView,
)
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.services.authorization_policy import Action, AuthorizationPolicy
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class TaskService:
    """Task lifecycle: role-scoped reads, admin edits and assignee progress updates."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.policy = policy or AuthorizationPolicy()

    async def _load(self, task_id: str) -> TaskEntity:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _views(self, tasks: list[TaskEntity]) -> list[TaskView]:
        """Resolve assignees for all tasks with one user lookup; unknown ids are skipped."""
        ids = sorted({uid for task in tasks for uid in task.assigned_to})
        users = await self.user_repo.get_many(ids) if ids else {}
        return [
            TaskView(
                task=task,
                assignees=[
                    _assignee(users[uid]) for uid in task.assigned_to if uid in users
                ],
            )
            for task in tasks
        ]

    async def _view(self, task: TaskEntity) -> TaskView:
        return (await self._views([task]))[0]

    async def scoped_tasks(self, principal: UserResult) -> list[TaskEntity]:
        """Return all tasks for admins; assigned tasks for members."""
        if self.policy.can(principal, Action.TASK_LIST_ALL):
            return await self.task_repo.list_all()
        return await self.task_repo.list_by_assignee(principal.id)

    @traced("task.create")
    async def create_task(self, principal: UserResult, data: TaskCreate) -> TaskView:
        """Create a task owned by principal (admin only)."""
        self.policy.require(principal, Action.TASK_CREATE)
        task = TaskEntity.create(
            title=data.title,
            created_by=principal.id,
            assigned_to=data.assigned_to,
            description=data.description,
            priority=data.priority,
            status=data.status,
            due_date=data.due_date,
            attachments=data.attachments,
            todo_checklist=data.todo_checklist,
        )
        created = await self.task_repo.create(task)
        logger.info("Task created: id=%s by=%s", created.id, principal.id)
        return await self._view(created)

    async def get_task(self, principal: UserResult, task_id: str) -> TaskView:
        """Return one task. Members may only read tasks assigned to them."""
        task = await self._load(task_id)
        self.policy.require(principal, Action.TASK_READ, task=task)
        return await self._view(task)

    async def list_tasks(
        self, principal: UserResult, status: TaskStatus | None = None
    ) -> TaskListResult:
        """Return role-scoped tasks, optionally filtered by status, with a status summary."""
        scoped = await self.scoped_tasks(principal)
        filtered = [t for t in scoped if status is None or t.status == status]
        summary = StatusSummary(
            all=len(scoped),
            pending_tasks=_count_status(filtered, TaskStatus.PENDING),
            in_progress_tasks=_count_status(filtered, TaskStatus.IN_PROGRESS),
            completed_tasks=_count_status(filtered, TaskStatus.COMPLETED),
        )
        return TaskListResult(tasks=await self._views(filtered), status_summary=summary)

    @traced("task.update")
    async def update_task(
        self, principal: UserResult, task_id: str, **changes: Any
    ) -> TaskView:
        """Merge-if-present field update (admin only).

        Accepts title, description, priority, due_date, attachments,
        todo_checklist and assigned_to. Falsy values keep the stored value.
        """
        self.policy.require(principal, Action.TASK_UPDATE)
        task = await self._load(task_id)
        task.apply_updates(**changes)
        saved = await self.task_repo.save(task)
        return await self._view(saved)

    @traced("task.update_status")
    async def update_status(
        self, principal: UserResult, task_id: str, status: TaskStatus | str | None
    ) -> TaskView:
        """Set status directly (admin or assignee). Completed forces the checklist.

        A missing status re-applies the stored one.
        """
        task = await self._load(task_id)
        self.policy.require(principal, Action.TASK_UPDATE_STATUS, task=task)
        task.set_status(status or task.status)
        saved = await self.task_repo.save(task)
        logger.info("Task status set: id=%s status=%s", saved.id, saved.status.value)
        return await self._view(saved)

    @traced("task.update_checklist")
    async def update_checklist(
        self, principal: UserResult, task_id: str, checklist: Iterable[Any] | None
    ) -> TaskView:
        """Replace the checklist (admin or assignee); progress and status follow it."""
        if checklist is not None and not isinstance(checklist, (list, tuple)):
            raise ValidationException(
                "todoChecklist must be an array", field="todoChecklist"
            )
        task = await self._load(task_id)
        self.policy.require(principal, Action.TASK_UPDATE_CHECKLIST, task=task)
        task.replace_checklist(checklist or [])
        saved = await self.task_repo.save(task)
        return await self._view(saved)

    @traced("task.delete")
    async def delete_task(self, principal: UserResult, task_id: str) -> None:
        """Hard delete (admin only)."""
        self.policy.require(principal, Action.TASK_DELETE)
        await self._load(task_id)
        await self.task_repo.delete(task_id)
        logger.info("Task deleted: id=%s by=%s", task_id, principal.id)


def _assignee(user: UserResult) -> AssigneeSummary:
    return AssigneeSummary(
        id=user.id,
        name=user.name,
        email=user.email,
        profile_image_url=user.profile_image_url,
    )


def _count_status(tasks: list[TaskEntity], status: TaskStatus) -> int:
    return sum(1 for t in tasks if t.status == status)
