"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated. bcrypt is CPU-bound, so the
async helpers run it in a worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt

from app.core.config import get_settings

_dummy_hash_cache: str | None = None


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """Return bcrypt hash of password; cost defaults to settings.bcrypt_rounds."""
    salt = bcrypt.gensalt(rounds=rounds or get_settings().bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str | None) -> bool:
    """Verify in a worker thread. A missing hash is compared against a dummy hash
    so unknown accounts take as long as wrong passwords."""
    if not hashed_password:
        await asyncio.to_thread(verify_password, plain_password, await _get_dummy_hash())
        return False
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison (timing-attack mitigation)."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await hash_password_async("not-a-real-password")
    return _dummy_hash_cache
