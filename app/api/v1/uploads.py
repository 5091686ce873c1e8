"""Multipart helpers shared by the auth and users routers."""

from fastapi import UploadFile

from app.application.services import ImageUpload


async def read_image_upload(upload: UploadFile | None) -> ImageUpload | None:
    """Buffer an optional profile image; None when no file was sent."""
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return ImageUpload(
        data=data,
        content_type=upload.content_type or "",
        filename=upload.filename,
    )
