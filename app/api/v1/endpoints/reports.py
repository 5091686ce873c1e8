"""Reports API: Excel exports of tasks and per-member task counts (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from app.api.v1.dependencies import get_report_service, require_action
from app.application.dtos.report import ReportFile
from app.application.dtos.user import UserResult
from app.application.services import Action
from app.application.use_cases import ReportService
from app.core.limiter import limit_exports
from app.infrastructure.external.spreadsheet import XLSX_MEDIA_TYPE

router = APIRouter()

ReportAdmin = Annotated[UserResult, Depends(require_action(Action.REPORT_EXPORT))]


def _attachment(report: ReportFile) -> Response:
    return Response(
        content=report.content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


_XLSX_RESPONSE = {200: {"content": {XLSX_MEDIA_TYPE: {}}, "description": "Excel workbook"}}


@router.get("/export/tasks", response_class=Response, responses=_XLSX_RESPONSE)
@limit_exports
async def export_tasks_report(
    request: Request,
    current_user: ReportAdmin,
    report_service: Annotated[ReportService, Depends(get_report_service)],
):
    """Download all tasks as tasks_report.xlsx."""
    return _attachment(await report_service.export_tasks_report())


@router.get("/export/users", response_class=Response, responses=_XLSX_RESPONSE)
@limit_exports
async def export_users_report(
    request: Request,
    current_user: ReportAdmin,
    report_service: Annotated[ReportService, Depends(get_report_service)],
):
    """Download per-member task counts as user_task_report.xlsx."""
    return _attachment(await report_service.export_users_report())
