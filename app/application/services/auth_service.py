"""Auth application service: register, login, token authentication and own profile."""

from __future__ import annotations

import logging
import secrets

from app.application.dtos.user import AuthResult, UserResult, UserUpdate
from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import ITokenIssuer
from app.application.services.authorization_policy import AuthorizationPolicy
from app.application.services.profile_images import ImageUpload, ProfileImageService
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthenticationException,
    EmailAlreadyRegisteredException,
    ResourceNotFoundException,
)
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuing for the current principal."""

    def __init__(
        self,
        user_repo: IUserRepository,
        tokens: ITokenIssuer,
        profile_images: ProfileImageService | None = None,
        admin_invite_token: str | None = None,
        policy: AuthorizationPolicy | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._tokens = tokens
        self._profile_images = profile_images
        self._admin_invite_token = admin_invite_token
        self._policy = policy or AuthorizationPolicy()

    def _role_for_invite(self, invite: str | None) -> UserRole:
        if (
            invite
            and self._admin_invite_token
            and secrets.compare_digest(invite, self._admin_invite_token)
        ):
            return UserRole.ADMIN
        return UserRole.MEMBER

    async def _upload(self, image: ImageUpload | None) -> str | None:
        if image is None:
            return None
        if self._profile_images is None:
            raise RuntimeError("Profile image storage is not configured")
        return await self._profile_images.upload(image)

    def _issue(self, user: UserResult) -> AuthResult:
        return AuthResult(user=user, access_token=self._tokens.create_access_token(user.id))

    @traced("auth.register")
    async def register(
        self,
        name: str,
        email: str,
        password: str,
        admin_invite_token: str | None = None,
        profile_image: ImageUpload | None = None,
    ) -> AuthResult:
        """Create a user (admin when the invite token matches) and issue a token.

        Raises:
            EmailAlreadyRegisteredException: Email is taken; no token is issued.
        """
        role = self._role_for_invite(admin_invite_token)
        if await self._user_repo.email_registered(email):
            raise EmailAlreadyRegisteredException(email)
        profile_image_url = await self._upload(profile_image)
        user = await self._user_repo.create_user(
            name=name,
            email=email,
            password=password,
            role=role,
            profile_image_url=profile_image_url,
        )
        logger.info("User registered: id=%s role=%s", user.id, user.role.value)
        return self._issue(user)

    @traced("auth.login")
    async def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token.

        The password is checked before the active flag so a wrong password
        never reveals whether an account is deactivated.

        Raises:
            AuthenticationException: Unknown email or wrong password.
            InactiveAccountException: Credentials are valid but the account is deactivated.
        """
        user = await self._user_repo.authenticate(email, password)
        if user is None:
            raise AuthenticationException("Invalid email or password")
        self._policy.ensure_active(user)
        return self._issue(user)

    async def authenticate(self, token: str) -> UserResult:
        """Resolve a bearer token to an active principal.

        Raises:
            AuthenticationException: Token missing, malformed or expired.
            InactiveAccountException: The user is deactivated or was deleted.
        """
        try:
            user_id = self._tokens.decode_subject(token)
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e
        user = await self._user_repo.get_by_id(user_id)
        return self._policy.ensure_active(user)

    async def get_profile(self, principal: UserResult) -> UserResult:
        user = await self._user_repo.get_by_id(principal.id)
        if user is None:
            raise ResourceNotFoundException("user", principal.id)
        return user

    @traced("auth.update_profile")
    async def update_profile(
        self,
        principal: UserResult,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        role: UserRole | None = None,
        is_active: bool | None = None,
        profile_image: ImageUpload | None = None,
    ) -> AuthResult:
        """Update the principal's own record and issue a fresh token.

        Empty values keep the stored value. role and is_active are applied
        only when the principal is an admin.
        """
        changes = UserUpdate(
            name=name or None,
            email=email or None,
            password=password or None,
            role=role if principal.is_admin else None,
            is_active=is_active if principal.is_admin else None,
            profile_image_url=await self._upload(profile_image),
        )
        user = await self._user_repo.update_user(principal.id, changes)
        return self._issue(user)
