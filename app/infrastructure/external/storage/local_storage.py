"""Filesystem object storage; main.py serves the root under MEDIA_URL_PATH."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path

import aiofiles

from app.infrastructure.exceptions import (
    StorageChecksumMismatchError,
    StoragePermissionError,
    StorageUploadError,
)
from app.infrastructure.external.storage.protocol import StoredObject
from app.shared.utils.datetime import utc_now

MEDIA_URL_PATH = "/media"
SIDECAR_SUFFIX = ".meta.json"


class LocalStorageService:
    """Stores objects below one root directory.

    Keys are relative POSIX paths and may not resolve outside the root. Each
    object is written to a temp file next to its target, hashed back from
    disk and renamed into place only when the digest matches. A JSON sidecar
    records content type, digest and upload time.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        self.root = Path(storage_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True, mode=0o750)
        self._origin = (base_url or "").rstrip("/")

    def _resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root):
            raise StoragePermissionError(key, "write")
        return path

    def public_url(self, key: str) -> str:
        return f"{self._origin}{MEDIA_URL_PATH}/{key}"

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        *,
        sha256: str | None = None,
    ) -> StoredObject:
        target = self._resolve(key)
        expected = sha256 or hashlib.sha256(data).hexdigest()
        try:
            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".upload-")
            os.close(fd)
            tmp = Path(tmp_name)
            try:
                async with aiofiles.open(tmp, "wb") as out:
                    await out.write(data)
                async with aiofiles.open(tmp, "rb") as written:
                    actual = hashlib.sha256(await written.read()).hexdigest()
                if actual != expected:
                    raise StorageChecksumMismatchError(key, expected, actual)
                tmp.chmod(0o644)
                tmp.replace(target)
            finally:
                tmp.unlink(missing_ok=True)
            sidecar = {
                "content_type": content_type,
                "sha256": actual,
                "size": len(data),
                "stored_at": utc_now().isoformat(),
            }
            async with aiofiles.open(target.with_name(target.name + SIDECAR_SUFFIX), "w") as meta:
                await meta.write(json.dumps(sidecar))
        except OSError as e:
            raise StorageUploadError(key, str(e)) from e
        return StoredObject(key=key, sha256=actual, size=len(data), url=self.public_url(key))
