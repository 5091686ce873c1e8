"""Users API: member listing with task counts and admin user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import EmailStr

from app.api.v1.dependencies import CurrentUser, get_user_service, require_action
from app.api.v1.uploads import read_image_upload
from app.application.dtos.user import UserResult
from app.application.services import Action, UserService
from app.core.limiter import limit_writes
from app.schemas.common import MessageResponse
from app.schemas.user import AdminUserUpdateResponse, MemberResponse, UserResponse

router = APIRouter()


@router.get("", response_model=list[MemberResponse])
async def list_users(
    current_user: Annotated[UserResult, Depends(require_action(Action.USER_LIST))],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """List members with pending, in-progress and completed task counts (admin only)."""
    members = await user_service.list_members(current_user)
    return [MemberResponse.from_counts(m) for m in members]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Return one user. Admins may read anyone; members only themselves."""
    return UserResponse.model_validate(await user_service.get_user(current_user, user_id))


@router.put("/{user_id}", response_model=AdminUserUpdateResponse)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    current_user: Annotated[UserResult, Depends(require_action(Action.USER_UPDATE))],
    user_service: Annotated[UserService, Depends(get_user_service)],
    name: Annotated[str | None, Form()] = None,
    email: Annotated[EmailStr | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    role: Annotated[str | None, Form()] = None,
    is_active: Annotated[bool | None, Form(alias="isActive")] = None,
    profile_image_url: Annotated[str | None, Form(alias="profileImageUrl")] = None,
    profile_image: Annotated[UploadFile | None, File(alias="profileImage")] = None,
):
    """Admin edit of any user. profileImageUrl="null" removes the avatar."""
    updated = await user_service.update_user(
        current_user,
        user_id,
        name=name,
        email=email,
        password=password,
        role=role,
        is_active=is_active,
        profile_image_url=profile_image_url,
        profile_image=await read_image_upload(profile_image),
    )
    return AdminUserUpdateResponse.from_result(updated, "User updated by admin")


@router.delete("/{user_id}", response_model=MessageResponse)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    current_user: Annotated[UserResult, Depends(require_action(Action.USER_DELETE))],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Hard delete a user and release their email (admin only)."""
    await user_service.delete_user(current_user, user_id)
    return MessageResponse(message="User deleted successfully")
