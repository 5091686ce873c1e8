"""Reset a user's password in Firestore.

Usage:
    uv run python -m scripts.reset_password <user_id> <new_password>
All imports use app.*.
"""

import asyncio
import sys

from app.application.dtos.user import UserUpdate
from app.core.config import get_settings
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase import create_firestore_client
from app.infrastructure.firebase.repositories import FirestoreUserRepository


async def main() -> None:
    """Reset password for user_id."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.reset_password <user_id> <new_password>",
            file=sys.stderr,
        )
        sys.exit(1)
    user_id = sys.argv[1]
    new_password = sys.argv[2]

    client = create_firestore_client(get_settings())
    if client is None:
        print("Firestore not configured", file=sys.stderr)
        sys.exit(1)
    try:
        user_repo = FirestoreUserRepository(client)
        try:
            user = await user_repo.update_user(user_id, UserUpdate(password=new_password))
        except ResourceNotFoundException:
            print(f"User not found: {user_id}", file=sys.stderr)
            sys.exit(1)
        print(f"Password reset for user {user.id} ({user.email})")
    finally:
        await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
