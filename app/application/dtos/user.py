"""DTOs for user use cases (no dependency on the document store)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool = True
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class UserUpdate:
    """Fields to change on a user; None means keep the stored value."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: UserRole | None = None
    is_active: bool | None = None
    profile_image_url: str | None = None
    clear_profile_image: bool = False


@dataclass(frozen=True)
class AuthResult:
    """Principal summary plus a freshly issued access token."""

    user: UserResult
    access_token: str


@dataclass(frozen=True)
class MemberTaskCounts:
    """Member with per-status counts of the tasks assigned to them."""

    user: UserResult
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0

    @property
    def total_tasks(self) -> int:
        return self.pending_tasks + self.in_progress_tasks + self.completed_tasks
