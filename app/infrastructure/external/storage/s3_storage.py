"""S3-compatible object storage (AWS S3, MinIO, Spaces) through boto3."""

from __future__ import annotations

import asyncio
import base64
import hashlib

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.infrastructure.exceptions import StorageChecksumMismatchError, StorageUploadError
from app.infrastructure.external.storage.protocol import StoredObject


class S3StorageService:
    """Puts objects into one bucket; boto3 calls run in a worker thread.

    The SHA-256 digest travels as ChecksumSHA256, so the service rejects a
    body corrupted in transit, and is kept as object metadata. Objects must
    be readable through public_base_url (bucket policy or CDN) for avatar
    URLs to resolve.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        self.bucket = bucket
        self._client = boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
        if public_base_url:
            origin = public_base_url
        elif endpoint_url:
            origin = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            origin = f"https://{bucket}.s3.{region}.amazonaws.com"
        self._origin = origin.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self._origin}/{key}"

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        *,
        sha256: str | None = None,
    ) -> StoredObject:
        digest = hashlib.sha256(data).digest()
        if sha256 and sha256 != digest.hex():
            raise StorageChecksumMismatchError(key, sha256, digest.hex())
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ChecksumSHA256=base64.b64encode(digest).decode("ascii"),
                Metadata={"sha256": digest.hex()},
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageUploadError(key, str(e)) from e
        return StoredObject(key=key, sha256=digest.hex(), size=len(data), url=self.public_url(key))
