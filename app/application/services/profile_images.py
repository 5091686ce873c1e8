"""Profile image validation and upload through the asset uploader."""

from __future__ import annotations

from dataclasses import dataclass

from app.application.interfaces.services import IAssetUploader
from app.domain.exceptions import ValidationException

PROFILE_IMAGE_FOLDER = "users"


@dataclass(frozen=True)
class ImageUpload:
    """Uploaded image buffered in memory."""

    data: bytes
    content_type: str
    filename: str | None = None


class ProfileImageService:
    """Validate an avatar against the allow-list and size cap, then store it."""

    def __init__(
        self,
        uploader: IAssetUploader,
        allowed_types: list[str],
        max_size: int,
        folder: str = PROFILE_IMAGE_FOLDER,
    ) -> None:
        self.uploader = uploader
        self.allowed_types = {t.lower() for t in allowed_types}
        self.max_size = max_size
        self.folder = folder

    def validate(self, image: ImageUpload) -> None:
        content_type = (image.content_type or "").split(";")[0].strip().lower()
        if content_type not in self.allowed_types:
            raise ValidationException(
                "Only .jpeg, .jpg and .png formats are allowed",
                field="profileImage",
            )
        if not image.data:
            raise ValidationException("Uploaded image is empty", field="profileImage")
        if len(image.data) > self.max_size:
            raise ValidationException(
                f"Image exceeds maximum size of {self.max_size} bytes",
                field="profileImage",
            )

    async def upload(self, image: ImageUpload) -> str:
        """Return the public URL of the stored image. Raises StorageUploadError from the uploader."""
        self.validate(image)
        return await self.uploader.store(
            image.data,
            self.folder,
            content_type=image.content_type.split(";")[0].strip().lower(),
            filename=image.filename,
        )
