"""Firestore integration over the REST API."""

from app.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentNotFoundError,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.client import create_firestore_client

__all__ = [
    "DocumentExistsError",
    "DocumentNotFoundError",
    "FirestoreRESTClient",
    "create_firestore_client",
]
