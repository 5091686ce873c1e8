"""Asset uploader: stores binary assets through a storage backend and returns a URL."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import PurePosixPath

from app.infrastructure.external.storage.protocol import StorageProtocol
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

_EXTENSIONS = {"image/jpeg": ".jpg", "image/jpg": ".jpg", "image/png": ".png"}


def _extension(content_type: str, filename: str | None) -> str:
    if content_type in _EXTENSIONS:
        return _EXTENSIONS[content_type]
    if filename and PurePosixPath(filename).suffix:
        return PurePosixPath(filename).suffix.lower()
    return mimetypes.guess_extension(content_type) or ".bin"


class StorageAssetUploader:
    """IAssetUploader over a StorageProtocol backend.

    Every upload gets a fresh CUID name under folder, so stored assets are
    never overwritten; the client-supplied filename only contributes its
    extension.
    """

    def __init__(self, storage: StorageProtocol) -> None:
        self._storage = storage

    async def store(
        self,
        data: bytes,
        folder: str,
        content_type: str,
        filename: str | None = None,
    ) -> str:
        storage_ref = f"{folder.strip('/')}/{generate_cuid()}{_extension(content_type, filename)}"
        stored = await self._storage.put(storage_ref, data, content_type)
        logger.info("Asset stored: ref=%s size=%s", stored.key, stored.size)
        return stored.url
