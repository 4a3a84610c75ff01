"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deployment small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Iterable, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from byki_admin.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
    encode_fields,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_LIST_PAGE_SIZE = 300


def _get_credentials(key_dict: dict, scopes: Sequence[str] = (_FIRESTORE_SCOPE,)):
    """Return google.oauth2.service_account.Credentials for the given scopes."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=list(scopes)
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestoreError(Exception):
    """Base error for Firestore REST failures that are not plain transport errors."""


class DocumentExistsError(FirestoreError):
    """Raised when createDocument returns 409 (document ID already exists)."""


class QueryFailedError(FirestoreError):
    """Raised when runQuery is rejected (e.g. the composite index is missing)."""

    def __init__(self, collection_id: str, status_code: int, detail: str = "") -> None:
        self.collection_id = collection_id
        self.status_code = status_code
        super().__init__(
            f"Query on {collection_id!r} failed with HTTP {status_code}: {detail}"
        )


class BatchWriteError(FirestoreError):
    """Raised when an atomic :commit is rejected; no write in the batch was applied."""


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    *,
    allow_missing: bool = True,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None when allowed."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404 and allow_missing:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError("Document already exists")
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class ArrayUnion:
    """Write sentinel: append each value not already present in the array field."""

    def __init__(self, values: Iterable[Any]) -> None:
        self.values = list(values)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ArrayUnion) and other.values == self.values

    def __repr__(self) -> str:
        return f"ArrayUnion({self.values!r})"


def _split_transforms(
    data: dict[str, Any],
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Separate plain field values from server-side transforms."""
    plain: dict[str, Any] = {}
    transforms: list[dict[str, Any]] = []
    for key, value in data.items():
        if isinstance(value, ArrayUnion):
            transforms.append({
                "fieldPath": key,
                "appendMissingElements": {
                    "values": [_encode_value(v) for v in value.values]
                },
            })
        else:
            plain[key] = value
    return plain, transforms


def _update_write(name: str, data: dict[str, Any]) -> dict[str, Any]:
    """Build a :commit write that updates only the given fields of an existing doc."""
    plain, transforms = _split_transforms(data)
    write: dict[str, Any] = {
        "update": {"name": name, "fields": encode_fields(plain)},
        "updateMask": {"fieldPaths": list(plain)},
        "currentDocument": {"exists": True},
    }
    if transforms:
        write["updateTransforms"] = transforms
    return write


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        return self._path

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        doc = encode_document(data)
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="PATCH",
            body=doc,
            access_token=await self._client.get_token(),
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Update only the given fields; the document must exist.

        ArrayUnion values are applied server-side in the same write.
        """
        await self._client.commit([_update_write(self._path, data)])

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{_BASE}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out), path=self._path)

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict, path: str | None = None):
        self.id = id_
        self._data = data
        self.path = path

    def to_dict(self) -> dict:
        return self._data


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains_any": "ARRAY_CONTAINS_ANY",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

_DIRECTION_MAP: dict[str, str] = {
    "asc": "ASCENDING",
    "desc": "DESCENDING",
    "ASCENDING": "ASCENDING",
    "DESCENDING": "DESCENDING",
}


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/offset/limit on server)."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._start_after: DocumentSnapshot | None = None
        self._offset: int = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "_Query":
        """Add a filter; multiple filters are AND-ed."""
        self._filters.append((field, _OP_MAP.get(op, op), value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._order_by_field = field
        self._order_direction = _DIRECTION_MAP.get(direction, direction)
        return self

    def start_after(self, snapshot: DocumentSnapshot) -> "_Query":
        """Resume after ``snapshot`` in the current ordering."""
        self._start_after = snapshot
        return self

    def offset(self, n: int) -> "_Query":
        self._offset = n
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def _field_filter(self, field: str, op: str, value: Any) -> dict[str, Any]:
        return {
            "fieldFilter": {
                "field": {"fieldPath": field},
                "op": op,
                "value": _encode_value(value),
            }
        }

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._field_filter(*self._filters[0])
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {
                    "op": "AND",
                    "filters": [self._field_filter(*f) for f in self._filters],
                }
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._start_after is not None:
            values = []
            if self._order_by_field is not None:
                values.append(
                    _encode_value(
                        self._start_after.to_dict().get(self._order_by_field)
                    )
                )
            values.append({
                "referenceValue": self._start_after.path
                or f"{self._parent}/{self._collection_id}/{self._start_after.id}"
            })
            structured["startAt"] = {"values": values, "before": False}
        if self._offset:
            structured["offset"] = self._offset
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        url = f"{_BASE}/{self._parent}:runQuery"
        body = {"structuredQuery": self._structured_query()}
        try:
            resp = await _request_async(
                self._client._http,
                url,
                method="POST",
                body=body,
                access_token=await self._client.get_token(),
                allow_missing=False,
            )
        except httpx.HTTPStatusError as e:
            raise QueryFailedError(
                self._collection_id, e.response.status_code, e.response.text
            ) from e
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            yield DocumentSnapshot(_doc_id(name), decode_document(doc), path=name)


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        doc = encode_document(data)
        url = f"{_BASE}/{self._path}?documentId={quote(document_id, safe='')}"
        await _request_async(
            self._client._http,
            url,
            method="POST",
            body=doc,
            access_token=await self._client.get_token(),
        )

    async def add(self, data: dict[str, Any]) -> str:
        """Create a document with a server-generated ID and return that ID."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            allow_missing=False,
        )
        return _doc_id((out or {}).get("name", ""))

    def _query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        return _Query(self._client, parent, self.id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Use .order_by(), .offset(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        return self._query().order_by(field, direction)

    def limit(self, n: int) -> _Query:
        return self._query().limit(n)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection (shallow), following page tokens."""
        page_token: str | None = None
        while True:
            url = f"{_BASE}/{self._path}?pageSize={_LIST_PAGE_SIZE}"
            if page_token:
                url += f"&pageToken={quote(page_token, safe='')}"
            out = await _request_async(
                self._client._http, url, access_token=await self._client.get_token()
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                yield DocumentSnapshot(_doc_id(name), decode_document(doc), path=name)
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self._database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_path: str) -> CollectionReference:
        """Collection or sub-collection by slash path (e.g. ``users/{uid}/vehicles``)."""
        return CollectionReference(self, f"{self._prefix}/{collection_path}")

    def _write_for(self, entry: dict[str, Any]) -> dict[str, Any]:
        name = f"{self._prefix}/{entry['path']}"
        if entry.get("delete"):
            return {"delete": name}
        if entry.get("merge"):
            return _update_write(name, entry["data"])
        return {"update": {"name": name, "fields": encode_fields(entry["data"])}}

    async def commit(self, writes: list[dict[str, Any]]) -> None:
        """Apply raw REST writes atomically (all or nothing)."""
        if not writes:
            return
        try:
            await _request_async(
                self._http,
                f"{_BASE}/{self._database}/documents:commit",
                method="POST",
                body={"writes": writes},
                access_token=await self.get_token(),
                allow_missing=False,
            )
        except httpx.HTTPStatusError as e:
            raise BatchWriteError(
                f"Commit of {len(writes)} writes failed with HTTP "
                f"{e.response.status_code}: {e.response.text}"
            ) from e

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Apply writes atomically.

        Each entry is ``{"path": "coll/id", "data": {...}}`` (full set),
        ``{"path": ..., "data": {...}, "merge": True}`` (field update of an
        existing document) or ``{"path": ..., "delete": True}``.
        """
        await self.commit([self._write_for(entry) for entry in writes])
