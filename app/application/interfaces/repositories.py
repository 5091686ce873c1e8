"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from app.domain.enums import UserRole

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult, UserUpdate
    from app.domain.entities.task import TaskEntity


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task repository (DIP)."""

    async def create(self, task: TaskEntity) -> TaskEntity:
        """Persist a new task; assign id and timestamps; return the stored task."""

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        """Return task by ID."""

    async def save(self, task: TaskEntity) -> TaskEntity:
        """Overwrite a stored task (last write wins); refresh updated_at."""

    async def delete(self, task_id: str) -> None:
        """Hard delete. No error when the task is already gone."""

    async def list_all(self) -> list[TaskEntity]:
        """Return every task, newest first."""

    async def list_by_assignee(self, user_id: str) -> list[TaskEntity]:
        """Return tasks whose assignee list contains user_id, newest first."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_many(self, user_ids: list[str]) -> dict[str, UserResult]:
        """Return users keyed by id; unknown ids are omitted."""

    async def list_by_role(self, role: UserRole) -> list[UserResult]:
        """Return all users with the given role."""

    async def email_registered(self, email: str) -> bool:
        """Return True if a user already holds this email (case-insensitive)."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the user when the password matches (active or not); otherwise None."""

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.MEMBER,
        profile_image_url: str | None = None,
    ) -> UserResult:
        """Create user with hashed password. Raises EmailAlreadyRegisteredException."""

    async def update_user(self, user_id: str, changes: UserUpdate) -> UserResult:
        """Apply changes. Raises ResourceNotFoundException or EmailAlreadyRegisteredException."""

    async def delete_user(self, user_id: str) -> None:
        """Hard delete the user and release their email."""
