"""Cloud Storage boundary for product images (JSON API over httpx).

Uploaded objects get a Firebase download token so the returned URL works
in the mobile app exactly like URLs produced by the Firebase SDKs.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from urllib.parse import quote, unquote, urlparse

import httpx

from byki_admin.infrastructure.firebase._rest_client import _get_access_token

logger = logging.getLogger(__name__)

STORAGE_SCOPE = "https://www.googleapis.com/auth/devstorage.read_write"
_UPLOAD_BASE = "https://storage.googleapis.com/upload/storage/v1"
_API_BASE = "https://storage.googleapis.com/storage/v1"
_DOWNLOAD_BASE = "https://firebasestorage.googleapis.com/v0"


def object_path_from_url(bucket: str, url_or_path: str) -> str:
    """Return the object name for a download URL, a gs:// URL, or a bare path."""
    if url_or_path.startswith("gs://"):
        return url_or_path.removeprefix(f"gs://{bucket}/")
    parsed = urlparse(url_or_path)
    if parsed.scheme in ("http", "https") and "/o/" in parsed.path:
        return unquote(parsed.path.split("/o/", 1)[1])
    return url_or_path.lstrip("/")


class FirebaseStorageClient:
    """Upload, link and delete objects in one bucket."""

    def __init__(
        self,
        bucket: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bucket = bucket
        self._credentials = credentials
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=60.0)
        self._owns_http = http_client is None

    @property
    def bucket(self) -> str:
        return self._bucket

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _headers(self) -> dict[str, str]:
        token = await asyncio.to_thread(_get_access_token, self._credentials)
        return {"Authorization": f"Bearer {token}"}

    def public_url(self, path: str, token: str) -> str:
        return (
            f"{_DOWNLOAD_BASE}/b/{self._bucket}/o/{quote(path, safe='')}"
            f"?alt=media&token={token}"
        )

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store ``content`` under ``path`` and return its download URL."""
        headers = await self._headers()
        resp = await self._http.post(
            f"{_UPLOAD_BASE}/b/{self._bucket}/o",
            params={"uploadType": "media", "name": path},
            headers={**headers, "Content-Type": content_type},
            content=content,
        )
        resp.raise_for_status()
        download_token = str(uuid.uuid4())
        resp = await self._http.patch(
            f"{_API_BASE}/b/{self._bucket}/o/{quote(path, safe='')}",
            headers=headers,
            json={"metadata": {"firebaseStorageDownloadTokens": download_token}},
        )
        resp.raise_for_status()
        logger.info("Uploaded %s (%s bytes) to %s", path, len(content), self._bucket)
        return self.public_url(path, download_token)

    async def delete(self, url_or_path: str) -> None:
        """Delete an object by path or by any URL pointing at it. Missing objects are ignored."""
        path = object_path_from_url(self._bucket, url_or_path)
        resp = await self._http.delete(
            f"{_API_BASE}/b/{self._bucket}/o/{quote(path, safe='')}",
            headers=await self._headers(),
        )
        if resp.status_code == 404:
            return
        resp.raise_for_status()
