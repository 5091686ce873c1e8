"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.task_repo_firestore import (
    FirestoreTaskRepository,
)
from app.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestoreTaskRepository",
    "FirestoreUserRepository",
]
