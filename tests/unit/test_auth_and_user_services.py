"""AuthService and UserService tests over the in-memory store."""

from datetime import timedelta

import pytest

from app.application.dtos.task import TaskCreate
from app.application.services import (
    AuthService,
    ImageUpload,
    ProfileImageService,
    UserService,
)
from app.application.use_cases.tasks import TaskService
from app.domain.enums import TaskStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    EmailAlreadyRegisteredException,
    InactiveAccountException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.firebase.repositories import (
    FirestoreTaskRepository,
    FirestoreUserRepository,
)
from app.infrastructure.security import JWTTokenIssuer
from tests.fakes import InMemoryDocumentStore

INVITE = "let-me-in"
PNG = ImageUpload(data=b"\x89PNG fake", content_type="image/png", filename="me.png")


class RecordingUploader:
    """IAssetUploader double that records stored folders."""

    def __init__(self) -> None:
        self.folders: list[str] = []

    async def store(self, data, folder, content_type, filename=None) -> str:
        self.folders.append(folder)
        return f"https://cdn.example.com/{folder}/{len(self.folders)}.png"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def user_repo(store: InMemoryDocumentStore) -> FirestoreUserRepository:
    return FirestoreUserRepository(store)


@pytest.fixture
def task_repo(store: InMemoryDocumentStore) -> FirestoreTaskRepository:
    return FirestoreTaskRepository(store)


@pytest.fixture
def uploader() -> RecordingUploader:
    return RecordingUploader()


@pytest.fixture
def images(uploader: RecordingUploader) -> ProfileImageService:
    return ProfileImageService(uploader, ["image/jpeg", "image/png", "image/jpg"], max_size=1024)


@pytest.fixture
def auth(user_repo: FirestoreUserRepository, images: ProfileImageService) -> AuthService:
    return AuthService(user_repo, JWTTokenIssuer(), profile_images=images, admin_invite_token=INVITE)


@pytest.fixture
def users(
    user_repo: FirestoreUserRepository,
    task_repo: FirestoreTaskRepository,
    images: ProfileImageService,
) -> UserService:
    return UserService(user_repo, task_repo, profile_images=images)


class TestRegisterAndLogin:
    async def test_register_member_by_default(self, auth: AuthService) -> None:
        result = await auth.register("Mia", "Mia@Example.com", "pw123")
        assert result.user.role == UserRole.MEMBER
        assert result.user.email == "mia@example.com"
        assert result.access_token

    async def test_invite_grants_admin(self, auth: AuthService) -> None:
        assert (await auth.register("A", "a@example.com", "pw", INVITE)).user.role == UserRole.ADMIN
        assert (await auth.register("B", "b@example.com", "pw", "wrong")).user.role == UserRole.MEMBER

    async def test_no_configured_invite_never_grants_admin(
        self, user_repo: FirestoreUserRepository
    ) -> None:
        auth = AuthService(user_repo, JWTTokenIssuer())
        assert (await auth.register("A", "a@example.com", "pw", "")).user.role == UserRole.MEMBER

    async def test_duplicate_email_conflicts(self, auth: AuthService) -> None:
        await auth.register("Mia", "mia@example.com", "pw")
        with pytest.raises(EmailAlreadyRegisteredException):
            await auth.register("Other", " MIA@example.com ", "pw")

    async def test_duplicate_email_uploads_nothing(
        self, auth: AuthService, uploader: RecordingUploader
    ) -> None:
        await auth.register("Mia", "mia@example.com", "pw")
        with pytest.raises(EmailAlreadyRegisteredException):
            await auth.register("Other", "mia@example.com", "pw", profile_image=PNG)
        assert uploader.folders == []

    async def test_register_uploads_avatar(
        self, auth: AuthService, uploader: RecordingUploader
    ) -> None:
        result = await auth.register("Mia", "mia@example.com", "pw", profile_image=PNG)
        assert result.user.profile_image_url == "https://cdn.example.com/users/1.png"
        assert uploader.folders == ["users"]

    async def test_register_rejects_non_image(self, auth: AuthService) -> None:
        gif = ImageUpload(data=b"GIF89a", content_type="image/gif", filename="x.gif")
        with pytest.raises(ValidationException):
            await auth.register("Mia", "mia@example.com", "pw", profile_image=gif)

    async def test_login(self, auth: AuthService) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw123")
        result = await auth.login("MIA@example.com", "pw123")
        assert result.user.id == registered.user.id

    async def test_login_wrong_password_or_unknown_email(self, auth: AuthService) -> None:
        await auth.register("Mia", "mia@example.com", "pw123")
        with pytest.raises(AuthenticationException):
            await auth.login("mia@example.com", "nope")
        with pytest.raises(AuthenticationException):
            await auth.login("nobody@example.com", "pw123")

    async def test_login_inactive_after_password_check(
        self, auth: AuthService, user_repo: FirestoreUserRepository
    ) -> None:
        from app.application.dtos.user import UserUpdate

        registered = await auth.register("Mia", "mia@example.com", "pw123")
        await user_repo.update_user(registered.user.id, UserUpdate(is_active=False))
        with pytest.raises(AuthenticationException):
            await auth.login("mia@example.com", "wrong")
        with pytest.raises(InactiveAccountException):
            await auth.login("mia@example.com", "pw123")


class TestAuthenticate:
    async def test_round_trip(self, auth: AuthService) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw")
        principal = await auth.authenticate(registered.access_token)
        assert principal.id == registered.user.id

    async def test_garbage_token(self, auth: AuthService) -> None:
        with pytest.raises(AuthenticationException):
            await auth.authenticate("not-a-jwt")

    async def test_expired_token(self, auth: AuthService) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw")
        expired = JWTTokenIssuer(expires_delta=timedelta(seconds=-10)).create_access_token(
            registered.user.id
        )
        with pytest.raises(AuthenticationException):
            await auth.authenticate(expired)

    async def test_deleted_user_token(
        self, auth: AuthService, user_repo: FirestoreUserRepository
    ) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw")
        await user_repo.delete_user(registered.user.id)
        with pytest.raises(InactiveAccountException):
            await auth.authenticate(registered.access_token)


class TestUpdateProfile:
    async def test_member_cannot_change_own_role(self, auth: AuthService) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw")
        result = await auth.update_profile(
            registered.user, name="Mia B", role=UserRole.ADMIN, is_active=False
        )
        assert result.user.name == "Mia B"
        assert result.user.role == UserRole.MEMBER
        assert result.user.is_active is True
        assert result.access_token

    async def test_email_change_releases_old_email(self, auth: AuthService) -> None:
        registered = await auth.register("Mia", "mia@example.com", "pw")
        await auth.update_profile(registered.user, email="mia.new@example.com", password="pw2")
        await auth.login("mia.new@example.com", "pw2")
        again = await auth.register("Someone", "mia@example.com", "pw")
        assert again.user.email == "mia@example.com"

    async def test_email_change_to_taken_email_conflicts(self, auth: AuthService) -> None:
        mia = await auth.register("Mia", "mia@example.com", "pw")
        await auth.register("Omar", "omar@example.com", "pw")
        with pytest.raises(EmailAlreadyRegisteredException):
            await auth.update_profile(mia.user, email="omar@example.com")


class TestUserService:
    async def test_list_members_with_counts(
        self,
        auth: AuthService,
        users: UserService,
        user_repo: FirestoreUserRepository,
        task_repo: FirestoreTaskRepository,
    ) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw")).user
        omar = (await auth.register("Omar", "omar@example.com", "pw")).user
        tasks = TaskService(task_repo, user_repo)
        await tasks.create_task(admin, TaskCreate(title="A", assigned_to=[mia.id]))
        await tasks.create_task(
            admin, TaskCreate(title="B", assigned_to=[mia.id], status=TaskStatus.COMPLETED)
        )

        members = await users.list_members(admin)
        assert [m.user.name for m in members] == ["Mia", "Omar"]
        assert (members[0].pending_tasks, members[0].completed_tasks) == (1, 1)
        assert members[1].total_tasks == 0
        assert omar.id == members[1].user.id

        with pytest.raises(AuthorizationException):
            await users.list_members(mia)

    async def test_get_user_self_or_admin(self, auth: AuthService, users: UserService) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw")).user
        omar = (await auth.register("Omar", "omar@example.com", "pw")).user
        assert (await users.get_user(mia, mia.id)).id == mia.id
        assert (await users.get_user(admin, mia.id)).id == mia.id
        with pytest.raises(AuthorizationException):
            await users.get_user(omar, mia.id)
        with pytest.raises(ResourceNotFoundException):
            await users.get_user(admin, "missing")

    async def test_admin_update(self, auth: AuthService, users: UserService) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw", profile_image=PNG)).user
        assert mia.profile_image_url

        updated = await users.update_user(
            admin, mia.id, role="admin", is_active=False, profile_image_url="null"
        )
        assert updated.role == UserRole.ADMIN
        assert updated.is_active is False
        assert updated.profile_image_url is None

        kept = await users.update_user(admin, mia.id, name="", is_active=None)
        assert kept.name == "Mia"
        assert kept.is_active is False

    async def test_admin_update_new_image_wins_over_clear(
        self, auth: AuthService, users: UserService
    ) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw")).user
        updated = await users.update_user(admin, mia.id, profile_image_url="null", profile_image=PNG)
        assert updated.profile_image_url is not None

    async def test_admin_update_rejects_unknown_role(
        self, auth: AuthService, users: UserService
    ) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw")).user
        with pytest.raises(ValidationException):
            await users.update_user(admin, mia.id, role="superuser")

    async def test_delete_user_releases_email(self, auth: AuthService, users: UserService) -> None:
        admin = (await auth.register("Admin", "admin@example.com", "pw", INVITE)).user
        mia = (await auth.register("Mia", "mia@example.com", "pw")).user
        await users.delete_user(admin, mia.id)
        with pytest.raises(ResourceNotFoundException):
            await users.delete_user(admin, mia.id)
        await auth.register("New Mia", "mia@example.com", "pw")
