"""Tests for dashboard aggregation."""

from datetime import UTC, datetime, timedelta

from app.application.use_cases.analytics import build_dashboard, distribution_key
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _task(
    title: str,
    status: TaskStatus = TaskStatus.PENDING,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: datetime | None = None,
    created_at: datetime | None = None,
) -> TaskEntity:
    return TaskEntity(
        id=title,
        title=title,
        created_by="admin",
        status=status,
        priority=priority,
        due_date=due_date,
        created_at=created_at,
    )


def test_distribution_key_strips_whitespace() -> None:
    assert distribution_key(TaskStatus.IN_PROGRESS) == "InProgress"


def test_counts_and_chart_maps() -> None:
    tasks = [
        _task("a", TaskStatus.PENDING, TaskPriority.LOW),
        _task("b", TaskStatus.PENDING, TaskPriority.HIGH),
        _task("c", TaskStatus.COMPLETED, TaskPriority.HIGH),
    ]
    result = build_dashboard(tasks, now=NOW)
    assert result.statistics.total_tasks == 3
    assert result.statistics.pending_tasks == 2
    assert result.statistics.completed_tasks == 1
    assert result.task_distribution == {
        "Pending": 2,
        "InProgress": 0,
        "Completed": 1,
        "All": 3,
    }
    assert result.task_priority_levels == {"Low": 1, "Medium": 0, "High": 2}


def test_overdue_excludes_completed_and_undated() -> None:
    past = NOW - timedelta(days=1)
    tasks = [
        _task("late", due_date=past),
        _task("late-naive", due_date=past.replace(tzinfo=None)),
        _task("done", TaskStatus.COMPLETED, due_date=past),
        _task("future", due_date=NOW + timedelta(days=1)),
        _task("undated"),
    ]
    assert build_dashboard(tasks, now=NOW).statistics.overdue_tasks == 2


def test_recent_tasks_newest_first_and_limited() -> None:
    tasks = [
        _task(f"t{i}", created_at=NOW - timedelta(hours=i)) for i in range(12)
    ]
    recent = build_dashboard(tasks, now=NOW).recent_tasks
    assert len(recent) == 10
    assert [t.title for t in recent[:3]] == ["t0", "t1", "t2"]


def test_empty() -> None:
    result = build_dashboard([], now=NOW)
    assert result.statistics.total_tasks == 0
    assert result.task_distribution["All"] == 0
    assert result.recent_tasks == []
