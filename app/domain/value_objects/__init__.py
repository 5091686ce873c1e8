"""Domain value objects and shared value types."""

from app.domain.value_objects.checklist import (
    ChecklistItem,
    build_checklist,
    compute_progress,
    status_for_progress,
)

__all__ = [
    "ChecklistItem",
    "build_checklist",
    "compute_progress",
    "status_for_progress",
]
