"""Checklist value object and progress/status derivation rules."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from app.domain.enums import TaskStatus
from app.domain.exceptions import ValidationException

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on", "t", "y"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", "f", "n"})


def _completed_flag(value: Any) -> bool:
    """Read a completion flag the way request validation reads booleans.

    Accepts real booleans, 0/1 and the usual true/false strings; a missing
    value is False.

    Raises:
        ValidationException: Any other value.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationException(
        f"Checklist item completed must be a boolean, got {value!r}",
        field="todoChecklist",
    )


@dataclass(frozen=True)
class ChecklistItem:
    """One checklist entry. Immutable; replace the item to toggle completion."""

    text: str
    completed: bool = False

    def mark_completed(self) -> "ChecklistItem":
        """Return a completed copy of this item."""
        if self.completed:
            return self
        return ChecklistItem(text=self.text, completed=True)

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "completed": self.completed}

    @classmethod
    def from_value(cls, value: "ChecklistItem | Mapping[str, Any]") -> "ChecklistItem":
        """Build from a stored/request mapping; missing text is an empty string."""
        if isinstance(value, ChecklistItem):
            return value
        if not isinstance(value, Mapping):
            raise ValidationException(
                "Checklist items must be objects with text and completed",
                field="todoChecklist",
            )
        return cls(
            text=str(value.get("text") or ""),
            completed=_completed_flag(value.get("completed")),
        )


def build_checklist(
    items: Iterable["ChecklistItem | Mapping[str, Any]"] | None,
) -> list[ChecklistItem]:
    """Normalize request or stored checklist data into ChecklistItem values."""
    if items is None:
        return []
    return [ChecklistItem.from_value(item) for item in items]


def compute_progress(checklist: list[ChecklistItem]) -> int:
    """Return integer completion percentage (0 for an empty checklist).

    Halves round up (12.5 -> 13). A partially completed checklist is clamped
    to 1..99 so 100 always means every item is done and 0 means none are,
    even for checklists long enough to round across those bounds.
    """
    total = len(checklist)
    if total == 0:
        return 0
    completed = sum(1 for item in checklist if item.completed)
    if completed == total:
        return 100
    if completed == 0:
        return 0
    rounded = int(math.floor(completed * 100 / total + 0.5))
    return min(max(rounded, 1), 99)


def status_for_progress(progress: int) -> TaskStatus:
    """Map checklist progress to task status (100 Completed, >0 In Progress, else Pending)."""
    if progress >= 100:
        return TaskStatus.COMPLETED
    if progress > 0:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.PENDING
