"""Auth API schemas."""

from pydantic import EmailStr, Field

from app.application.dtos.user import AuthResult
from app.domain.enums import UserRole
from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Principal summary plus bearer token (register, login, profile update)."""

    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    profile_image_url: str | None = None
    token: str
    token_type: str = "bearer"

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        user = result.user
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            profile_image_url=user.profile_image_url,
            token=result.access_token,
        )
