"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    EmailAlreadyRegisteredException,
    InactiveAccountException,
    ResourceNotFoundException,
    TaskboardException,
    ValidationException,
)
from app.domain.value_objects import ChecklistItem

__all__ = [
    # Entities
    "TaskEntity",
    # Enums
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "EmailAlreadyRegisteredException",
    "InactiveAccountException",
    "ResourceNotFoundException",
    "TaskboardException",
    "ValidationException",
    # Value objects
    "ChecklistItem",
]
