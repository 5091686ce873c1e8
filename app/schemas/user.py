"""User API schemas."""

from datetime import datetime

from app.application.dtos.user import MemberTaskCounts, UserResult
from app.domain.enums import UserRole
from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """User response (no password)."""

    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MemberResponse(UserResponse):
    """Member with per-status counts of assigned tasks."""

    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0

    @classmethod
    def from_counts(cls, counts: MemberTaskCounts) -> "MemberResponse":
        return cls(
            **UserResponse.model_validate(counts.user).model_dump(),
            pending_tasks=counts.pending_tasks,
            in_progress_tasks=counts.in_progress_tasks,
            completed_tasks=counts.completed_tasks,
        )


class AdminUserUpdateResponse(CamelModel):
    """Response for PUT /users/{id}."""

    message: str
    user: UserResponse

    @classmethod
    def from_result(cls, user: UserResult, message: str) -> "AdminUserUpdateResponse":
        return cls(message=message, user=UserResponse.model_validate(user))
