"""Pytest configuration and fixtures for taskboard.

Environment is set before app.main is imported (settings are read in
create_app). HTTP tests run against app.main:app with the document store
replaced by an in-memory double through dependency overrides.
"""

import os
import tempfile

os.environ["SECRET_KEY"] = "test-secret-key-for-taskboard-tests"
os.environ["ADMIN_INVITE_TOKEN"] = "test-admin-invite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="taskboard-test-storage-")
os.environ["STORAGE_BASE_URL"] = "http://test"
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["REPORT_LOCALE"] = "en"
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_KEY", None)
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_PATH", None)

from collections.abc import Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import get_document_store  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import InMemoryDocumentStore  # noqa: E402

ADMIN_INVITE = "test-admin-invite"
DEFAULT_PASSWORD = "Secret123!"

RegisterFn = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store per test."""
    return InMemoryDocumentStore()


@pytest.fixture
async def client(store: InMemoryDocumentStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by the in-memory store."""
    app.dependency_overrides[get_document_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterFn:
    """Register through the API and return the JSON body (id, role, token, ...)."""

    async def _register(
        name: str,
        email: str,
        password: str = DEFAULT_PASSWORD,
        admin: bool = False,
    ) -> dict[str, Any]:
        data = {"name": name, "email": email, "password": password}
        if admin:
            data["adminInviteToken"] = ADMIN_INVITE
        response = await client.post("/api/v1/auth/register", data=data)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin(register_user: RegisterFn) -> dict[str, Any]:
    """Registered admin: JSON body plus ready-made headers."""
    body = await register_user("Ada Admin", "ada@example.com", admin=True)
    return {**body, "headers": bearer(body["token"])}


@pytest.fixture
async def member(register_user: RegisterFn) -> dict[str, Any]:
    body = await register_user("Mia Member", "mia@example.com")
    return {**body, "headers": bearer(body["token"])}


@pytest.fixture
async def other_member(register_user: RegisterFn) -> dict[str, Any]:
    body = await register_user("Omar Other", "omar@example.com")
    return {**body, "headers": bearer(body["token"])}
