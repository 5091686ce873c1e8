"""Storage: local filesystem and S3-compatible backends.

The local backend needs only aiofiles. The S3 backend loads boto3 on
demand; install the "storage" extra to use it.
"""

from app.infrastructure.external.storage.asset_uploader import StorageAssetUploader
from app.infrastructure.external.storage.factory import create_storage_service
from app.infrastructure.external.storage.protocol import StorageProtocol, StoredObject

__all__ = [
    "StorageAssetUploader",
    "StorageProtocol",
    "StoredObject",
    "create_storage_service",
]
