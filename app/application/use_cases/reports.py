"""Report use case: tabular task and per-member exports.

Builds ReportTable rows; serialization to a workbook is left to the
spreadsheet writer. Labels, headers and date format follow the configured
report locale ("en" or "tr").
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.report import ReportFile, ReportTable
from app.application.dtos.user import MemberTaskCounts, UserResult
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        ITaskRepository,
        IUserRepository,
    )
    from app.application.interfaces.services import ISpreadsheetWriter
    from app.domain.entities.task import TaskEntity

TASKS_REPORT_FILENAME = "tasks_report.xlsx"
USERS_REPORT_FILENAME = "user_task_report.xlsx"

TASK_COLUMN_WIDTHS = [25, 30, 50, 15, 20, 20, 30]
USER_COLUMN_WIDTHS = [30, 40, 20, 20, 20, 20]


@dataclass(frozen=True)
class ReportLabels:
    """Locale-specific text for report exports."""

    task_headers: tuple[str, ...]
    user_headers: tuple[str, ...]
    statuses: dict[TaskStatus, str]
    priorities: dict[TaskPriority, str]
    unassigned: str
    date_format: str


REPORT_LABELS: dict[str, ReportLabels] = {
    "en": ReportLabels(
        task_headers=(
            "Task ID",
            "Title",
            "Description",
            "Priority",
            "Status",
            "Due Date",
            "Assigned To",
        ),
        user_headers=(
            "User Name",
            "Email",
            "Total Tasks",
            "Pending Tasks",
            "In Progress Tasks",
            "Completed Tasks",
        ),
        statuses={s: s.value for s in TaskStatus},
        priorities={p: p.value for p in TaskPriority},
        unassigned="Unassigned",
        date_format="%Y-%m-%d",
    ),
    "tr": ReportLabels(
        task_headers=(
            "Görev ID",
            "Başlık",
            "Açıklama",
            "Öncelik",
            "Durum",
            "Teslim Tarihi",
            "Atanan Kişi(ler)",
        ),
        user_headers=(
            "Kullanıcı Adı",
            "E-posta",
            "Toplam Görev",
            "Bekleyen Görevler",
            "Devam Eden Görevler",
            "Tamamlanan Görevler",
        ),
        statuses={
            TaskStatus.PENDING: "Beklemede",
            TaskStatus.IN_PROGRESS: "Devam Ediyor",
            TaskStatus.COMPLETED: "Tamamlandı",
        },
        priorities={
            TaskPriority.LOW: "Düşük",
            TaskPriority.MEDIUM: "Orta",
            TaskPriority.HIGH: "Yüksek",
        },
        unassigned="Atanmamış",
        date_format="%d.%m.%Y",
    ),
}


def get_report_labels(locale: str) -> ReportLabels:
    """Return labels for locale. Raises ValidationException for an unknown locale."""
    try:
        return REPORT_LABELS[locale]
    except KeyError:
        raise ValidationException(
            f"Unsupported report locale: {locale!r}", field="report_locale"
        ) from None


def tally_member_tasks(
    members: Sequence[UserResult], tasks: Sequence[TaskEntity]
) -> list[MemberTaskCounts]:
    """Count assigned tasks per member and status; members without tasks get zeros.

    Assignee ids that are not in members are ignored. Output keeps the order of members.
    """
    counts: dict[str, dict[TaskStatus, int]] = {
        m.id: {status: 0 for status in TaskStatus} for m in members
    }
    for task in tasks:
        for user_id in task.assigned_to:
            if user_id in counts:
                counts[user_id][task.status] += 1
    return [
        MemberTaskCounts(
            user=m,
            pending_tasks=counts[m.id][TaskStatus.PENDING],
            in_progress_tasks=counts[m.id][TaskStatus.IN_PROGRESS],
            completed_tasks=counts[m.id][TaskStatus.COMPLETED],
        )
        for m in members
    ]


def format_due_date(value: datetime | None, labels: ReportLabels) -> str:
    return value.strftime(labels.date_format) if value is not None else ""


def build_tasks_table(
    tasks: Sequence[TaskEntity],
    users: dict[str, UserResult],
    labels: ReportLabels,
) -> ReportTable:
    """One row per task with localized labels and "name (email)" assignees."""
    rows = []
    for task in tasks:
        assignees = ", ".join(
            f"{users[uid].name} ({users[uid].email})"
            for uid in task.assigned_to
            if uid in users
        )
        rows.append(
            [
                task.id,
                task.title,
                task.description,
                labels.priorities.get(task.priority, task.priority.value),
                labels.statuses.get(task.status, task.status.value),
                format_due_date(task.due_date, labels),
                assignees or labels.unassigned,
            ]
        )
    return ReportTable(
        filename=TASKS_REPORT_FILENAME,
        sheet_title="Tasks Report",
        headers=list(labels.task_headers),
        rows=rows,
        column_widths=TASK_COLUMN_WIDTHS,
    )


def build_users_table(
    counts: Sequence[MemberTaskCounts], labels: ReportLabels
) -> ReportTable:
    """One row per member with total and per-status task counts."""
    rows = [
        [
            c.user.name,
            c.user.email,
            c.total_tasks,
            c.pending_tasks,
            c.in_progress_tasks,
            c.completed_tasks,
        ]
        for c in counts
    ]
    return ReportTable(
        filename=USERS_REPORT_FILENAME,
        sheet_title="User Task Report",
        headers=list(labels.user_headers),
        rows=rows,
        column_widths=USER_COLUMN_WIDTHS,
    )


class ReportService:
    """Admin exports of tasks and per-member task counts."""

    def __init__(
        self,
        task_repo: "ITaskRepository",
        user_repo: "IUserRepository",
        writer: "ISpreadsheetWriter",
        locale: str = "en",
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.writer = writer
        self.labels = get_report_labels(locale)

    async def tasks_report(self) -> ReportTable:
        tasks = await self.task_repo.list_all()
        ids = sorted({uid for task in tasks for uid in task.assigned_to})
        users = await self.user_repo.get_many(ids) if ids else {}
        return build_tasks_table(tasks, users, self.labels)

    async def users_report(self) -> ReportTable:
        members = await self.user_repo.list_by_role(UserRole.MEMBER)
        tasks = await self.task_repo.list_all()
        return build_users_table(tally_member_tasks(members, tasks), self.labels)

    def _render(self, table: ReportTable) -> ReportFile:
        content = self.writer.render(
            table.sheet_title, table.headers, table.rows, table.column_widths
        )
        return ReportFile(filename=table.filename, content=content)

    async def export_tasks_report(self) -> ReportFile:
        return self._render(await self.tasks_report())

    async def export_users_report(self) -> ReportFile:
        return self._render(await self.users_report())
