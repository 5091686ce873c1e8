"""Dashboard API schemas."""

from datetime import datetime

from app.application.dtos.dashboard import DashboardResult
from app.domain.enums import TaskPriority, TaskStatus
from app.schemas.common import CamelModel


class DashboardStatisticsResponse(CamelModel):
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    overdue_tasks: int


class DashboardChartsResponse(CamelModel):
    """Chart maps keyed by status (whitespace removed, plus All) and priority."""

    task_distribution: dict[str, int]
    task_priority_levels: dict[str, int]


class RecentTaskResponse(CamelModel):
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    created_at: datetime | None = None


class DashboardResponse(CamelModel):
    """Response for GET /tasks/dashboard-data and /tasks/user-dashboard-data."""

    statistics: DashboardStatisticsResponse
    charts: DashboardChartsResponse
    recent_tasks: list[RecentTaskResponse]

    @classmethod
    def from_result(cls, result: DashboardResult) -> "DashboardResponse":
        return cls(
            statistics=DashboardStatisticsResponse.model_validate(result.statistics),
            charts=DashboardChartsResponse(
                task_distribution=result.task_distribution,
                task_priority_levels=result.task_priority_levels,
            ),
            recent_tasks=[RecentTaskResponse.model_validate(t) for t in result.recent_tasks],
        )
