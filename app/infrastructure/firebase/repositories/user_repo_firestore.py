"""Firestore-backed user repository (implements IUserRepository).

Email uniqueness is enforced with a companion user_emails/{normalized_email}
document created before the user document (create fails with 409 when taken).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.dtos.user import UserResult, UserUpdate
from app.domain.enums import UserRole
from app.domain.exceptions import (
    EmailAlreadyRegisteredException,
    ResourceNotFoundException,
)
from app.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.collections import (
    COLLECTION_USER_EMAILS,
    COLLECTION_USERS,
)
from app.infrastructure.security.password import (
    hash_password_async,
    verify_password_async,
)
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class FirestoreUserRepository:
    """User repository using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)
        self._emails = client.collection(COLLECTION_USER_EMAILS)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> UserResult:
        return UserResult(
            id=doc_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=UserRole(data.get("role", UserRole.MEMBER.value)),
            is_active=data.get("is_active", True),
            profile_image_url=data.get("profile_image_url"),
            created_at=ensure_utc(data.get("created_at")),
            updated_at=ensure_utc(data.get("updated_at")),
        )

    async def _claim_email(self, email: str, user_id: str) -> None:
        try:
            await self._emails.create(
                email, {"user_id": user_id, "created_at": utc_now()}
            )
        except DocumentExistsError:
            raise EmailAlreadyRegisteredException(email) from None

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return self._to_result(doc.id, doc.to_dict())

    async def get_many(self, user_ids: list[str]) -> dict[str, UserResult]:
        """Return users keyed by id (fetched concurrently); unknown ids are omitted."""
        unique = list(dict.fromkeys(user_ids))
        results = await asyncio.gather(*(self.get_by_id(uid) for uid in unique))
        return {user.id: user for user in results if user is not None}

    async def list_by_role(self, role: UserRole) -> list[UserResult]:
        q = self._coll.where("role", "==", role.value)
        users = [self._to_result(s.id, s.to_dict()) async for s in q.stream()]
        return sorted(users, key=lambda u: (u.name.lower(), u.id))

    async def email_registered(self, email: str) -> bool:
        return await self._emails.document(normalize_email(email)).get() is not None

    async def _get_raw_by_email(self, email: str) -> tuple[str, dict] | None:
        link = await self._emails.document(normalize_email(email)).get()
        if not link:
            return None
        user_id = link.to_dict().get("user_id")
        if not user_id:
            return None
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return doc.id, doc.to_dict()

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Verify email/password; return the user (active or not) or None.

        Unknown emails still run a bcrypt comparison against a dummy hash.
        """
        found = await self._get_raw_by_email(email)
        if found is None:
            await verify_password_async(password, None)
            return None
        user_id, data = found
        if not await verify_password_async(password, data.get("hashed_password")):
            return None
        return self._to_result(user_id, data)

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.MEMBER,
        profile_image_url: str | None = None,
    ) -> UserResult:
        """Create user with hashed password; return created user.

        Raises:
            EmailAlreadyRegisteredException: The normalized email is taken.
        """
        email = normalize_email(email)
        user_id = generate_cuid()
        hashed = await hash_password_async(password)
        await self._claim_email(email, user_id)
        now = utc_now()
        data = {
            "name": name,
            "email": email,
            "hashed_password": hashed,
            "role": role.value,
            "is_active": True,
            "profile_image_url": profile_image_url,
            "created_at": now,
            "updated_at": now,
        }
        await self._coll.document(user_id).set(data)
        return self._to_result(user_id, data)

    async def update_user(self, user_id: str, changes: UserUpdate) -> UserResult:
        """Apply non-None changes; move the email claim when the email changes."""
        ref = self._coll.document(user_id)
        doc = await ref.get()
        if not doc:
            raise ResourceNotFoundException("user", user_id)
        data = doc.to_dict()
        updates: dict[str, Any] = {}
        old_email = data.get("email", "")
        if changes.email is not None and normalize_email(changes.email) != old_email:
            new_email = normalize_email(changes.email)
            await self._claim_email(new_email, user_id)
            updates["email"] = new_email
        if changes.name is not None:
            updates["name"] = changes.name
        if changes.password is not None:
            updates["hashed_password"] = await hash_password_async(changes.password)
        if changes.role is not None:
            updates["role"] = changes.role.value
        if changes.is_active is not None:
            updates["is_active"] = changes.is_active
        if changes.profile_image_url is not None:
            updates["profile_image_url"] = changes.profile_image_url
        elif changes.clear_profile_image:
            updates["profile_image_url"] = None
        updates["updated_at"] = utc_now()
        await ref.update(updates)
        if "email" in updates and old_email:
            await self._emails.document(old_email).delete()
        data.update(updates)
        return self._to_result(user_id, data)

    async def delete_user(self, user_id: str) -> None:
        """Hard delete the user document and release its email claim."""
        ref = self._coll.document(user_id)
        doc = await ref.get()
        if not doc:
            return
        await ref.delete()
        email = doc.to_dict().get("email")
        if email:
            await self._emails.document(email).delete()
        logger.info("User document deleted: id=%s", user_id)
