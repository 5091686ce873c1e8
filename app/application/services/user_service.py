"""User application service: member listing and admin user management."""

from __future__ import annotations

import logging

from app.application.dtos.user import MemberTaskCounts, UserResult, UserUpdate
from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.services.authorization_policy import Action, AuthorizationPolicy
from app.application.services.profile_images import ImageUpload, ProfileImageService
from app.application.use_cases.reports import tally_member_tasks
from app.domain.enums import UserRole
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

CLEAR_PROFILE_IMAGE = "null"


class UserService:
    """List members with task counts; read, update and delete users."""

    def __init__(
        self,
        user_repo: IUserRepository,
        task_repo: ITaskRepository,
        profile_images: ProfileImageService | None = None,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._task_repo = task_repo
        self._profile_images = profile_images
        self._policy = policy or AuthorizationPolicy()

    async def list_members(self, principal: UserResult) -> list[MemberTaskCounts]:
        """Members with pending/in-progress/completed counts (admin only)."""
        self._policy.require(principal, Action.USER_LIST)
        members = await self._user_repo.list_by_role(UserRole.MEMBER)
        tasks = await self._task_repo.list_all()
        return tally_member_tasks(members, tasks)

    async def get_user(self, principal: UserResult, user_id: str) -> UserResult:
        """Return a user. Admins may read anyone; members only themselves."""
        self._policy.require(principal, Action.USER_READ, target_user_id=user_id)
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def update_user(
        self,
        principal: UserResult,
        user_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        role: UserRole | str | None = None,
        is_active: bool | None = None,
        profile_image_url: str | None = None,
        profile_image: ImageUpload | None = None,
    ) -> UserResult:
        """Admin edit with merge-if-present semantics.

        is_active is applied only when it is a real bool. profile_image_url
        "null" clears the avatar; an uploaded image replaces it.
        """
        self._policy.require(principal, Action.USER_UPDATE)
        if await self._user_repo.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        new_role: UserRole | None = None
        if role:
            try:
                new_role = UserRole(role)
            except ValueError as e:
                raise ValidationException(str(e), field="role") from e
        new_image_url: str | None = None
        if profile_image is not None:
            if self._profile_images is None:
                raise RuntimeError("Profile image storage is not configured")
            new_image_url = await self._profile_images.upload(profile_image)
        changes = UserUpdate(
            name=name or None,
            email=email or None,
            password=password or None,
            role=new_role,
            is_active=is_active if isinstance(is_active, bool) else None,
            profile_image_url=new_image_url,
            clear_profile_image=(
                new_image_url is None and profile_image_url == CLEAR_PROFILE_IMAGE
            ),
        )
        updated = await self._user_repo.update_user(user_id, changes)
        logger.info("User updated by admin: id=%s by=%s", user_id, principal.id)
        return updated

    async def delete_user(self, principal: UserResult, user_id: str) -> None:
        """Hard delete a user (admin only)."""
        self._policy.require(principal, Action.USER_DELETE)
        if await self._user_repo.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        await self._user_repo.delete_user(user_id)
        logger.info("User deleted: id=%s by=%s", user_id, principal.id)
