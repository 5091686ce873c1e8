"""Build the configured storage backend (local filesystem or S3)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from app.core.config import Settings

STORAGE_BACKENDS = ("local", "s3")


def _s3_backend(settings: Settings) -> StorageProtocol:
    # boto3 ships in the "storage" extra, so it is imported only when selected.
    try:
        from app.infrastructure.external.storage.s3_storage import S3StorageService
    except ImportError as e:
        raise ValueError(
            "The s3 storage backend needs boto3: pip install 'taskboard[storage]'"
        ) from e
    if not settings.s3_bucket:
        raise ValueError("S3_BUCKET is required for the s3 storage backend")
    secret = settings.s3_secret_key
    return S3StorageService(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key=settings.s3_access_key,
        secret_key=secret.get_secret_value() if secret else None,
        public_base_url=settings.storage_base_url,
    )


def create_storage_service(settings: Settings) -> StorageProtocol:
    """Return the backend named by settings.storage_backend.

    Raises:
        ValueError: Unknown backend, or its required settings are missing.
    """
    backend = settings.storage_backend.lower()
    if backend == "local":
        return LocalStorageService(settings.storage_root, base_url=settings.storage_base_url)
    if backend == "s3":
        return _s3_backend(settings)
    raise ValueError(
        f"Unknown storage backend {backend!r}; expected one of {STORAGE_BACKENDS}"
    )
