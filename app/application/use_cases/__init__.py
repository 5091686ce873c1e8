"""Application use cases: one entry point per workflow."""

from app.application.use_cases.analytics import GetDashboardDataUseCase
from app.application.use_cases.reports import ReportService
from app.application.use_cases.tasks import TaskService

__all__ = [
    "GetDashboardDataUseCase",
    "ReportService",
    "TaskService",
]
