"""Create an admin user directly in Firestore (no invite token needed).

Usage:
    uv run python -m scripts.create_admin <name> <email> [password]
If password is omitted, a random one is printed.
All imports use app.*.
"""

import asyncio
import secrets
import sys

from app.core.config import get_settings
from app.domain.enums import UserRole
from app.domain.exceptions import EmailAlreadyRegisteredException
from app.infrastructure.firebase import create_firestore_client
from app.infrastructure.firebase.repositories import FirestoreUserRepository


async def main() -> None:
    """Create an admin user from the command line."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.create_admin <name> <email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    name = sys.argv[1]
    email = sys.argv[2]
    password = sys.argv[3] if len(sys.argv) > 3 else secrets.token_urlsafe(12)

    client = create_firestore_client(get_settings())
    if client is None:
        print(
            "Firestore not configured: set FIREBASE_SERVICE_ACCOUNT_KEY or "
            "FIREBASE_SERVICE_ACCOUNT_PATH",
            file=sys.stderr,
        )
        sys.exit(1)
    try:
        user_repo = FirestoreUserRepository(client)
        try:
            user = await user_repo.create_user(
                name=name, email=email, password=password, role=UserRole.ADMIN
            )
        except EmailAlreadyRegisteredException:
            print(f"Email already registered: {email}", file=sys.stderr)
            sys.exit(1)
        print(f"Created admin: {user.id} ({user.email})")
        if len(sys.argv) <= 3:
            print(f"Password: {password}")
    finally:
        await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
