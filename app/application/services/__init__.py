"""Application services: authorization policy, auth, users, profile images."""

from app.application.services.auth_service import AuthService
from app.application.services.authorization_policy import Action, AuthorizationPolicy
from app.application.services.profile_images import ImageUpload, ProfileImageService
from app.application.services.user_service import UserService

__all__ = [
    "Action",
    "AuthService",
    "AuthorizationPolicy",
    "ImageUpload",
    "ProfileImageService",
    "UserService",
]
