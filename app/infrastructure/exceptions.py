"""Infrastructure exceptions for storage and external operations.

Storage errors extend TaskboardException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import TaskboardException


class StorageException(TaskboardException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageChecksumMismatchError(StorageException):
    """Checksum validation failed (corrupted write)."""

    def __init__(self, file_path: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum mismatch for file: {file_path}",
            "STORAGE_CHECKSUM_ERROR",
            {"file_path": file_path, "expected": expected, "actual": actual},
        )


class StoragePermissionError(StorageException):
    """Storage reference resolves outside the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )


class DocumentStoreUnavailableError(TaskboardException):
    """Raised when no document store is configured for the running app."""

    def __init__(self) -> None:
        super().__init__(
            "Document store is not configured",
            "SERVICE_UNAVAILABLE",
        )
