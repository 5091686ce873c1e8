"""Object storage contract shared by the local and S3 backends."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredObject:
    """Where an object landed and what was written."""

    key: str
    sha256: str
    size: int
    url: str


class StorageProtocol(Protocol):
    """Write-once object storage addressed by relative keys."""

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        *,
        sha256: str | None = None,
    ) -> StoredObject:
        """Store data under key.

        When sha256 is given the stored bytes must hash to it.

        Raises:
            StorageChecksumMismatchError: Stored bytes do not match sha256.
            StorageUploadError: The backend refused or failed the write.
        """
        ...

    def public_url(self, key: str) -> str:
        ...
