"""Local storage, asset uploader and profile image tests on a temporary directory."""

import hashlib
import json
from pathlib import Path

import pytest

from app.application.services import ImageUpload, ProfileImageService
from app.core.config import Settings
from app.domain.exceptions import ValidationException
from app.infrastructure.exceptions import (
    StorageChecksumMismatchError,
    StoragePermissionError,
)
from app.infrastructure.external.storage import StorageAssetUploader, create_storage_service
from app.infrastructure.external.storage.local_storage import LocalStorageService

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageService:
    return LocalStorageService(str(tmp_path), base_url="http://api.example.com/")


class TestLocalStorage:
    async def test_put_writes_file_and_sidecar(
        self, storage: LocalStorageService, tmp_path: Path
    ) -> None:
        stored = await storage.put("users/a.png", PNG_BYTES, "image/png")
        assert stored.size == len(PNG_BYTES)
        assert stored.sha256 == hashlib.sha256(PNG_BYTES).hexdigest()
        assert stored.url == "http://api.example.com/media/users/a.png"
        assert (tmp_path / "users" / "a.png").read_bytes() == PNG_BYTES
        sidecar = json.loads((tmp_path / "users" / "a.png.meta.json").read_text())
        assert sidecar["content_type"] == "image/png"

    async def test_checksum_mismatch_leaves_nothing(
        self, storage: LocalStorageService, tmp_path: Path
    ) -> None:
        with pytest.raises(StorageChecksumMismatchError):
            await storage.put("users/b.png", PNG_BYTES, "image/png", sha256="0" * 64)
        assert list((tmp_path / "users").iterdir()) == []

    async def test_path_traversal_rejected(
        self, storage: LocalStorageService, tmp_path: Path
    ) -> None:
        with pytest.raises(StoragePermissionError):
            await storage.put("../escape.png", PNG_BYTES, "image/png")
        assert not (tmp_path.parent / "escape.png").exists()

    def test_public_url(self, storage: LocalStorageService) -> None:
        assert storage.public_url("users/a.png") == "http://api.example.com/media/users/a.png"

    def test_factory_builds_local_backend(self, tmp_path: Path) -> None:
        settings = Settings(
            _env_file=None,
            secret_key="s",
            storage_backend="local",
            storage_root=str(tmp_path / "media"),
        )
        backend = create_storage_service(settings)
        assert isinstance(backend, LocalStorageService)
        assert backend.root == (tmp_path / "media").resolve()


class TestProfileImages:
    @pytest.fixture
    def images(self, storage: LocalStorageService) -> ProfileImageService:
        uploader = StorageAssetUploader(storage)
        return ProfileImageService(uploader, ["image/jpeg", "image/png", "image/jpg"], max_size=64)

    async def test_upload_returns_media_url(
        self, images: ProfileImageService, tmp_path: Path
    ) -> None:
        url = await images.upload(ImageUpload(PNG_BYTES, "image/png", "avatar.PNG"))
        assert url.startswith("http://api.example.com/media/users/")
        assert url.endswith(".png")
        stored = tmp_path / "users" / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == PNG_BYTES

    async def test_content_type_parameters_are_ignored(self, images: ProfileImageService) -> None:
        url = await images.upload(ImageUpload(PNG_BYTES, "image/jpeg; charset=binary", "a.jpeg"))
        assert url.endswith(".jpg")

    @pytest.mark.parametrize(
        "upload",
        [
            ImageUpload(b"GIF89a", "image/gif", "a.gif"),
            ImageUpload(b"", "image/png", "empty.png"),
            ImageUpload(b"x" * 65, "image/png", "big.png"),
        ],
    )
    async def test_rejected_uploads(
        self, images: ProfileImageService, upload: ImageUpload
    ) -> None:
        with pytest.raises(ValidationException) as exc:
            await images.upload(upload)
        assert exc.value.details["field"] == "profileImage"
