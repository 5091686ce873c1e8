"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, token issuer, uploader, spreadsheet writer).
"""

from app.application.interfaces import (
    IAssetUploader,
    ISpreadsheetWriter,
    ITaskRepository,
    ITokenIssuer,
    IUserRepository,
)
from app.application.services import AuthorizationPolicy, AuthService, UserService
from app.application.use_cases import (
    GetDashboardDataUseCase,
    ReportService,
    TaskService,
)

__all__ = [
    "AuthService",
    "AuthorizationPolicy",
    "GetDashboardDataUseCase",
    "IAssetUploader",
    "ISpreadsheetWriter",
    "ITaskRepository",
    "ITokenIssuer",
    "IUserRepository",
    "ReportService",
    "TaskService",
    "UserService",
]
