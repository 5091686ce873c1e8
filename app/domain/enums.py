"""Domain enumerations for the Taskboard application.

Enums represent fixed sets of domain values (roles, task status, priority).
Values are the wire values stored in the document store and returned by the API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Principal role. Admins manage tasks and users; members work on assigned tasks."""

    ADMIN = "admin"
    MEMBER = "member"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status.

    Derived from checklist progress on checklist updates; set directly by
    status updates. No terminal state: Completed tasks remain editable.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority level."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
