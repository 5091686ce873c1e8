"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.task import TaskEntity, validate_assignees

__all__ = [
    "TaskEntity",
    "validate_assignees",
]
