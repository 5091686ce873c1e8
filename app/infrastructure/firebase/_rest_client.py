"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deployment bundle small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import httpx

from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    document_id,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

ASCENDING = "ASCENDING"
DESCENDING = "DESCENDING"

_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array-contains": "ARRAY_CONTAINS",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentExistsError(Exception):
    """Raised when createDocument returns 409 (document ID already exists)."""


class DocumentNotFoundError(Exception):
    """Raised when updating a document that does not exist."""


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Single document at path; set/update/get/delete mirror the firestore SDK."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def set(self, data: dict[str, Any]) -> None:
        """Create or fully replace the document."""
        await self._client._request("PATCH", self._path, body=encode_document(data))

    async def update(self, data: dict[str, Any]) -> None:
        """Overwrite only the given top-level fields of an existing document.

        Raises:
            DocumentNotFoundError: The document does not exist.
        """
        params = [("updateMask.fieldPaths", key) for key in data]
        params.append(("currentDocument.exists", "true"))
        out = await self._client._request(
            "PATCH", self._path, body=encode_document(data), params=params
        )
        if out is None:
            raise DocumentNotFoundError(self._path)

    async def get(self) -> DocumentSnapshot | None:
        out = await self._client._request("GET", self._path)
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document; a missing document is not an error."""
        await self._client._request("DELETE", self._path)


class Query:
    """Structured query over one collection, run through documents:runQuery.

    where() calls are ANDed. No limit unless limit() is called.
    """

    def __init__(self, client: FirestoreRESTClient, parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict[str, Any]] = []
        self._order_by: list[dict[str, Any]] = []
        self._offset = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> Query:
        if op not in _OP_MAP:
            raise ValueError(f"Unsupported query operator: {op!r}")
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OP_MAP[op],
                    "value": _encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = ASCENDING) -> Query:
        self._order_by.append({"field": {"fieldPath": field}, "direction": direction})
        return self

    def offset(self, n: int) -> Query:
        self._offset = n
        return self

    def limit(self, n: int) -> Query:
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        if len(self._filters) == 1:
            query["where"] = self._filters[0]
        elif self._filters:
            query["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._order_by:
            query["orderBy"] = list(self._order_by)
        if self._offset:
            query["offset"] = self._offset
        if self._limit is not None:
            query["limit"] = self._limit
        return query

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Run the query and yield matching documents in server order."""
        resp = await self._client._request(
            "POST",
            f"{self._parent}:runQuery",
            body={"structuredQuery": self.to_structured_query()},
        )
        # runQuery answers with a JSON array; entries without "document"
        # only carry readTime.
        for item in resp or []:
            doc = item.get("document")
            if doc is not None:
                yield DocumentSnapshot(document_id(doc), decode_document(doc))


class CollectionReference:
    """Collection at path; document() and query builders mirror the firestore SDK."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID.

        Raises:
            DocumentExistsError: A document with that ID already exists.
        """
        await self._client._request(
            "POST",
            self._path,
            body=encode_document(data),
            params=[("documentId", document_id)],
        )

    def _query(self) -> Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> Query:
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = ASCENDING) -> Query:
        return self._query().order_by(field, direction)

    def limit(self, n: int) -> Query:
        return self._query().limit(n)

    def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Yield every document in the collection."""
        return self._query().stream()


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def project_id(self) -> str:
        return self._project_id

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in a worker thread."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> Any:
        """Call the REST API at path; return decoded JSON, or None on 404.

        Raises:
            DocumentExistsError: 409 from createDocument.
            httpx.HTTPStatusError: Any other non-2xx status.
        """
        resp = await self._http.request(
            method,
            f"{_BASE}/{path}",
            headers={"Authorization": f"Bearer {await self.get_token()}"},
            json=body,
            params=params,
        )
        if resp.status_code == 404:
            return None
        if resp.status_code == 409:
            raise DocumentExistsError(path)
        resp.raise_for_status()
        return resp.json() if resp.content else {}

    async def aclose(self) -> None:
        """Close the HTTP client unless it was injected."""
        if self._owns_http:
            await self._http.aclose()
