"""Auth API: register, login, logout and profile."""

from typing import Any

from httpx import AsyncClient

from tests.conftest import DEFAULT_PASSWORD, RegisterFn, bearer

PNG_BYTES = b"\x89PNG\r\n\x1a\navatar"


class TestRegister:
    async def test_member_by_default(self, register_user: RegisterFn) -> None:
        body = await register_user("Mia", "Mia@Example.com")
        assert body["role"] == "member"
        assert body["email"] == "mia@example.com"
        assert body["isActive"] is True
        assert body["tokenType"] == "bearer"
        assert body["token"]
        assert "password" not in body and "hashedPassword" not in body

    async def test_invite_token_grants_admin(self, admin: dict[str, Any]) -> None:
        assert admin["role"] == "admin"

    async def test_wrong_invite_token_is_member(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            data={
                "name": "Eve",
                "email": "eve@example.com",
                "password": "pw",
                "adminInviteToken": "guess",
            },
        )
        assert response.status_code == 201
        assert response.json()["role"] == "member"

    async def test_duplicate_email_conflict_without_token(
        self, client: AsyncClient, member: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            data={"name": "Mia 2", "email": "MIA@example.com", "password": "pw"},
        )
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "EMAIL_ALREADY_REGISTERED"
        assert "token" not in body

    async def test_invalid_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            data={"name": "X", "email": "not-an-email", "password": "pw"},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_avatar_upload_is_served(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            data={"name": "Pia", "email": "pia@example.com", "password": "pw"},
            files={"profileImage": ("pia.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 201
        url = response.json()["profileImageUrl"]
        assert url.startswith("http://test/media/users/")
        served = await client.get(url.removeprefix("http://test"))
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    async def test_avatar_type_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/register",
            data={"name": "Gif", "email": "gif@example.com", "password": "pw"},
            files={"profileImage": ("a.gif", b"GIF89a", "image/gif")},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestLogin:
    async def test_login(self, client: AsyncClient, member: dict[str, Any]) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "mia@example.com", "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == member["id"]
        profile = await client.get("/api/v1/auth/profile", headers=bearer(body["token"]))
        assert profile.status_code == 200

    async def test_wrong_password(self, client: AsyncClient, member: dict[str, Any]) -> None:
        response = await client.post(
            "/api/v1/auth/login", json={"email": "mia@example.com", "password": "wrong"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "AUTHENTICATION_ERROR"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/login", json={"email": "ghost@example.com", "password": "pw"}
        )
        assert response.status_code == 401

    async def test_inactive_account(
        self, client: AsyncClient, admin: dict[str, Any], member: dict[str, Any]
    ) -> None:
        deactivate = await client.put(
            f"/api/v1/users/{member['id']}",
            data={"isActive": "false"},
            headers=admin["headers"],
        )
        assert deactivate.status_code == 200
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "mia@example.com", "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 403
        assert response.json()["error"] == "ACCOUNT_INACTIVE"
        stale = await client.get("/api/v1/auth/profile", headers=member["headers"])
        assert stale.status_code == 403


class TestProfile:
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/profile")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated, no token"

    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/profile", headers=bearer("garbage"))
        assert response.status_code == 401

    async def test_get_profile(self, client: AsyncClient, member: dict[str, Any]) -> None:
        response = await client.get("/api/v1/auth/profile", headers=member["headers"])
        body = response.json()
        assert (body["id"], body["name"], body["role"]) == (member["id"], "Mia Member", "member")
        assert body["createdAt"]

    async def test_update_profile_issues_token(
        self, client: AsyncClient, member: dict[str, Any]
    ) -> None:
        response = await client.put(
            "/api/v1/auth/profile",
            data={"name": "Mia Renamed", "role": "admin", "password": "NewSecret1"},
            headers=member["headers"],
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Mia Renamed"
        assert body["role"] == "member"
        assert body["token"]
        login = await client.post(
            "/api/v1/auth/login", json={"email": "mia@example.com", "password": "NewSecret1"}
        )
        assert login.status_code == 200

    async def test_logout(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth/logout")
        assert response.json() == {"message": "Logged out successfully"}
