"""Auth API: register, login, logout and the current user's profile.

Register and profile update take multipart forms (optional profileImage
file); login takes JSON.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import EmailStr

from app.api.v1.dependencies import CurrentUser, get_auth_service
from app.api.v1.uploads import read_image_upload
from app.application.services import AuthService
from app.core.limiter import limit_auth, limit_register, limit_writes
from app.domain.enums import UserRole
from app.schemas.auth import AuthResponse, LoginRequest
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    name: Annotated[str, Form(min_length=1)],
    email: Annotated[EmailStr, Form()],
    password: Annotated[str, Form(min_length=1)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    admin_invite_token: Annotated[str | None, Form(alias="adminInviteToken")] = None,
    profile_image: Annotated[UploadFile | None, File(alias="profileImage")] = None,
):
    """Register a user (public). A matching adminInviteToken grants the admin role."""
    result = await auth_service.register(
        name=name,
        email=email,
        password=password,
        admin_invite_token=admin_invite_token,
        profile_image=await read_image_upload(profile_image),
    )
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; return the user summary and a JWT."""
    result = await auth_service.login(body.email, body.password)
    return AuthResponse.from_result(result)


@router.get("/logout", response_model=MessageResponse)
def logout() -> MessageResponse:
    """Stateless logout: tokens are not revoked, the client discards its token."""
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    current_user: CurrentUser,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Return the authenticated user's record. Requires Authorization: Bearer <token>."""
    return UserResponse.model_validate(await auth_service.get_profile(current_user))


@router.put("/profile", response_model=AuthResponse)
@limit_writes
async def update_profile(
    request: Request,
    current_user: CurrentUser,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    name: Annotated[str | None, Form()] = None,
    email: Annotated[EmailStr | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    role: Annotated[UserRole | None, Form()] = None,
    is_active: Annotated[bool | None, Form(alias="isActive")] = None,
    profile_image: Annotated[UploadFile | None, File(alias="profileImage")] = None,
):
    """Update own name, email, password or avatar and return a fresh token.

    role and isActive are applied only for admins.
    """
    result = await auth_service.update_profile(
        current_user,
        name=name,
        email=email,
        password=password,
        role=role,
        is_active=is_active,
        profile_image=await read_image_upload(profile_image),
    )
    return AuthResponse.from_result(result)
