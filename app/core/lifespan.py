"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (document store client, file
storage, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.storage import create_storage_service
from app.infrastructure.firebase import create_firestore_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the document store and storage backend; close the store and telemetry on exit.

    A missing Firestore configuration is not fatal: the app still serves
    health and docs, and store-backed routes answer 503.
    """
    settings = get_settings()

    store = create_firestore_client(settings)
    if store is None:
        logger.warning("Firestore is not configured; task and user endpoints will return 503")
    else:
        logger.info("Firestore client ready for project %s", store.project_id)
    app.state.document_store = store

    app.state.storage = create_storage_service(settings)
    logger.info("Storage backend: %s", settings.storage_backend)

    try:
        yield
    finally:
        if app.state.document_store is not None:
            await app.state.document_store.aclose()
            app.state.document_store = None
            logger.info("Firestore client closed")
        if getattr(app.state, "telemetry", None) is not None:
            app.state.telemetry.shutdown()
            app.state.telemetry = None
