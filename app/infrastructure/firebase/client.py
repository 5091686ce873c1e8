"""Firestore client factory (REST-based, no firebase-admin).

Built at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string)
or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The lifespan owns the returned
client and closes it at shutdown; nothing here is global.
"""

import json
import logging
from pathlib import Path

from app.core.config import Settings
from app.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def load_service_account(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path; None when neither is set.

    Raises:
        ValueError: The key is not valid JSON.
    """
    key = settings.firebase_service_account_key
    key_json = key.get_secret_value() if key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: Settings) -> FirestoreRESTClient | None:
    """Build a Firestore client from settings.

    Returns None when no service account is configured or it is unusable;
    the failure is logged so the app can still start (health, docs) and
    store-backed routes answer 503.
    """
    try:
        key_dict = load_service_account(settings)
        if not key_dict:
            return None
        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None
        credentials = _get_credentials(key_dict)
        return FirestoreRESTClient(
            project_id, credentials, timeout=settings.firestore_timeout_seconds
        )
    except (ValueError, OSError):
        logger.exception("Firebase initialization failed")
        return None
