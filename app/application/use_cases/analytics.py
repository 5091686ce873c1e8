"""Analytics use case: dashboard counts, chart maps and recent tasks."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.application.dtos.dashboard import DashboardResult, DashboardStatistics
from app.domain.enums import TaskPriority, TaskStatus
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.application.interfaces.repositories import ITaskRepository
    from app.domain.entities.task import TaskEntity

RECENT_TASKS_LIMIT = 10
_OLDEST = datetime.min.replace(tzinfo=UTC)


def distribution_key(status: TaskStatus) -> str:
    """Chart key for a status: its name with whitespace removed ("In Progress" -> "InProgress")."""
    return "".join(status.value.split())


def build_dashboard(
    tasks: Sequence[TaskEntity],
    now: datetime | None = None,
    recent_limit: int = RECENT_TASKS_LIMIT,
) -> DashboardResult:
    """Reduce tasks to dashboard statistics. Pure; order of tasks does not matter."""
    now = ensure_utc(now) if now is not None else utc_now()
    by_status = {status: 0 for status in TaskStatus}
    by_priority = {priority: 0 for priority in TaskPriority}
    overdue = 0
    for task in tasks:
        by_status[task.status] += 1
        by_priority[task.priority] += 1
        due = ensure_utc(task.due_date) if task.due_date is not None else None
        if task.status != TaskStatus.COMPLETED and due is not None and due < now:
            overdue += 1

    distribution = {distribution_key(s): n for s, n in by_status.items()}
    distribution["All"] = len(tasks)
    recent = sorted(
        tasks, key=lambda t: ensure_utc(t.created_at) or _OLDEST, reverse=True
    )[:recent_limit]
    return DashboardResult(
        statistics=DashboardStatistics(
            total_tasks=len(tasks),
            pending_tasks=by_status[TaskStatus.PENDING],
            completed_tasks=by_status[TaskStatus.COMPLETED],
            overdue_tasks=overdue,
        ),
        task_distribution=distribution,
        task_priority_levels={p.value: n for p, n in by_priority.items()},
        recent_tasks=recent,
    )


class GetDashboardDataUseCase:
    """Global and principal-scoped dashboards over the task store."""

    def __init__(self, task_repo: "ITaskRepository") -> None:
        self.task_repo = task_repo

    async def get_dashboard_data(self) -> DashboardResult:
        """Dashboard over every task."""
        return build_dashboard(await self.task_repo.list_all())

    async def get_user_dashboard_data(self, principal: "UserResult") -> DashboardResult:
        """Dashboard over the tasks assigned to principal."""
        return build_dashboard(await self.task_repo.list_by_assignee(principal.id))
