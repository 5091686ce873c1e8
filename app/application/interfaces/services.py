"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Asset upload interface
class IAssetUploader(Protocol):
    """Protocol for storing binary assets (profile images) and returning a public URL."""

    async def store(
        self,
        data: bytes,
        folder: str,
        content_type: str,
        filename: str | None = None,
    ) -> str:
        """Store data under folder; return its URL. Raises StorageUploadError on failure."""


# Token issuing interface
class ITokenIssuer(Protocol):
    """Protocol for signed access tokens."""

    def create_access_token(self, user_id: str) -> str:
        """Return a signed token whose subject is user_id."""

    def decode_subject(self, token: str) -> str:
        """Return the subject of a valid token. Raises ValueError when invalid or expired."""


# Spreadsheet serialization interface
class ISpreadsheetWriter(Protocol):
    """Protocol for rendering a report table to workbook bytes."""

    def render(
        self,
        sheet_title: str,
        headers: list[str],
        rows: list[list],
        column_widths: list[int] | None = None,
    ) -> bytes:
        """Return the serialized workbook."""
