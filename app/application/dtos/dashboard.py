"""DTOs for dashboard aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.task import TaskEntity


@dataclass(frozen=True)
class DashboardStatistics:
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    overdue_tasks: int


@dataclass(frozen=True)
class DashboardResult:
    """Counts, chart maps and the most recently created tasks.

    task_distribution keys are status names with whitespace removed plus
    "All"; task_priority_levels keys are the priority names.
    """

    statistics: DashboardStatistics
    task_distribution: dict[str, int] = field(default_factory=dict)
    task_priority_levels: dict[str, int] = field(default_factory=dict)
    recent_tasks: list[TaskEntity] = field(default_factory=list)
