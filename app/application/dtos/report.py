"""DTOs for tabular report exports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReportTable:
    """One worksheet: header row, data rows and the download filename."""

    filename: str
    sheet_title: str
    headers: list[str]
    rows: list[list[Any]] = field(default_factory=list)
    column_widths: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class ReportFile:
    """Serialized report ready for download."""

    filename: str
    content: bytes
