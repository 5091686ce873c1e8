"""Application DTOs (no document-store dependency)."""

from app.application.dtos.dashboard import DashboardResult, DashboardStatistics
from app.application.dtos.report import ReportFile, ReportTable
from app.application.dtos.task import (
    AssigneeSummary,
    StatusSummary,
    TaskCreate,
    TaskListResult,
    TaskView,
)
from app.application.dtos.user import (
    AuthResult,
    MemberTaskCounts,
    UserResult,
    UserUpdate,
)

__all__ = [
    "AssigneeSummary",
    "AuthResult",
    "DashboardResult",
    "DashboardStatistics",
    "MemberTaskCounts",
    "ReportFile",
    "ReportTable",
    "StatusSummary",
    "TaskCreate",
    "TaskListResult",
    "TaskView",
    "UserResult",
    "UserUpdate",
]
