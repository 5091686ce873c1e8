"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, repositories and
application services. Routes depend only on these dependencies, not on
infrastructure directly. The document store client and storage backend
are owned by the application lifespan (app.state).
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.user import UserResult
from app.application.services import (
    Action,
    AuthorizationPolicy,
    AuthService,
    ProfileImageService,
    UserService,
)
from app.application.use_cases import (
    GetDashboardDataUseCase,
    ReportService,
    TaskService,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.exceptions import DocumentStoreUnavailableError
from app.infrastructure.external.spreadsheet import XlsxSpreadsheetWriter
from app.infrastructure.external.storage import (
    StorageAssetUploader,
    StorageProtocol,
    create_storage_service,
)
from app.infrastructure.firebase import FirestoreRESTClient
from app.infrastructure.firebase.repositories import (
    FirestoreTaskRepository,
    FirestoreUserRepository,
)
from app.infrastructure.security import JWTTokenIssuer
from app.shared.context import set_current_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_document_store(request: Request) -> FirestoreRESTClient:
    """Firestore client created in the lifespan; 503 when it is not configured."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise DocumentStoreUnavailableError()
    return store


def get_storage(request: Request) -> StorageProtocol:
    """Storage backend from app.state; created on first use when the lifespan did not run."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = create_storage_service(get_settings())
        request.app.state.storage = storage
    return storage


def get_task_repo(
    store: Annotated[FirestoreRESTClient, Depends(get_document_store)],
) -> FirestoreTaskRepository:
    return FirestoreTaskRepository(store)


def get_user_repo(
    store: Annotated[FirestoreRESTClient, Depends(get_document_store)],
) -> FirestoreUserRepository:
    return FirestoreUserRepository(store)


def get_policy() -> AuthorizationPolicy:
    return AuthorizationPolicy()


def get_token_issuer() -> JWTTokenIssuer:
    return JWTTokenIssuer()


def get_profile_image_service(
    storage: Annotated[StorageProtocol, Depends(get_storage)],
) -> ProfileImageService:
    """Avatar validation and upload (allow-list and size cap from settings)."""
    settings = get_settings()
    return ProfileImageService(
        StorageAssetUploader(storage),
        allowed_types=settings.allowed_image_types_list,
        max_size=settings.max_avatar_size,
    )


def get_auth_service(
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    tokens: Annotated[JWTTokenIssuer, Depends(get_token_issuer)],
    profile_images: Annotated[ProfileImageService, Depends(get_profile_image_service)],
    policy: Annotated[AuthorizationPolicy, Depends(get_policy)],
) -> AuthService:
    invite = get_settings().admin_invite_token
    return AuthService(
        user_repo,
        tokens,
        profile_images=profile_images,
        admin_invite_token=invite.get_secret_value() if invite else None,
        policy=policy,
    )


def get_user_service(
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    task_repo: Annotated[FirestoreTaskRepository, Depends(get_task_repo)],
    profile_images: Annotated[ProfileImageService, Depends(get_profile_image_service)],
    policy: Annotated[AuthorizationPolicy, Depends(get_policy)],
) -> UserService:
    return UserService(user_repo, task_repo, profile_images=profile_images, policy=policy)


def get_task_service(
    task_repo: Annotated[FirestoreTaskRepository, Depends(get_task_repo)],
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    policy: Annotated[AuthorizationPolicy, Depends(get_policy)],
) -> TaskService:
    return TaskService(task_repo, user_repo, policy=policy)


def get_dashboard_use_case(
    task_repo: Annotated[FirestoreTaskRepository, Depends(get_task_repo)],
) -> GetDashboardDataUseCase:
    return GetDashboardDataUseCase(task_repo)


def get_report_service(
    task_repo: Annotated[FirestoreTaskRepository, Depends(get_task_repo)],
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
) -> ReportService:
    return ReportService(
        task_repo,
        user_repo,
        XlsxSpreadsheetWriter(),
        locale=get_settings().report_locale,
    )


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResult:
    """Resolve the bearer token to an active principal.

    Raises:
        AuthenticationException: No bearer token, or it is invalid/expired (401).
        InactiveAccountException: The principal is deactivated or deleted (403).
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated, no token")
    user = await auth_service.authenticate(credentials.credentials)
    set_current_user(user.id)
    return user


def require_action(
    action: Action,
) -> Callable[..., Coroutine[Any, Any, UserResult]]:
    """Dependency factory: the current user, if the policy allows action without a target."""

    async def dependency(
        current_user: Annotated[UserResult, Depends(get_current_user)],
        policy: Annotated[AuthorizationPolicy, Depends(get_policy)],
    ) -> UserResult:
        policy.require(current_user, action)
        return current_user

    return dependency


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
