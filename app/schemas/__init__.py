"""Pydantic request/response schemas for the API."""

from app.schemas.auth import AuthResponse, LoginRequest
from app.schemas.common import CamelModel, MessageResponse
from app.schemas.dashboard import DashboardResponse
from app.schemas.health import HealthResponse, RootResponse
from app.schemas.task import (
    TaskChecklistRequest,
    TaskCreateRequest,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from app.schemas.user import AdminUserUpdateResponse, MemberResponse, UserResponse

__all__ = [
    "AdminUserUpdateResponse",
    "AuthResponse",
    "CamelModel",
    "DashboardResponse",
    "HealthResponse",
    "LoginRequest",
    "MemberResponse",
    "MessageResponse",
    "RootResponse",
    "TaskChecklistRequest",
    "TaskCreateRequest",
    "TaskListResponse",
    "TaskMutationResponse",
    "TaskResponse",
    "TaskStatusRequest",
    "TaskUpdateRequest",
    "UserResponse",
]
