"""
Locate the generated video inside a completed operation's response body.

Different API revisions and regions have returned results under either
``videos`` or ``predictions``, and as either inline base64 or a storage
reference. The extractor walks a fixed list of rules and the first rule that
yields bytes wins:

1. ``videos[0].gcsUri`` (fetched; a failed fetch falls through)
2. ``videos[0].bytesBase64Encoded``
3. ``predictions[0].bytesBase64Encoded``
4. ``predictions[0].gcsUri`` (fetched)

Nothing matched raises :class:`NoArtifactError` with the whole body attached.
Any ``mimeType`` in the response is ignored; artifacts are always ``video/mp4``.
"""
import base64
import binascii
import json
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .exceptions import NoArtifactError
from .logger import get_library_logger
from .models import Artifact

GCS_SCHEME = "gs://"
GCS_HTTP_BASE = "https://storage.googleapis.com"
DOWNLOAD_TIMEOUT_SECONDS = 300

HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403


def gcs_uri_to_http(uri: str) -> str:
    """Map ``gs://bucket/path/to/object`` onto its storage.googleapis.com URL."""
    if not uri.startswith(GCS_SCHEME):
        return uri
    bucket, _, object_name = uri[len(GCS_SCHEME):].partition("/")
    return f"{GCS_HTTP_BASE}/{bucket}/{quote(object_name)}"


class BlobFetcher:
    """Plain GET of a storage URI or CDN URL, returning raw bytes."""

    def __init__(self, http_client: httpx.AsyncClient, access_token: Optional[str] = None, logger=None):
        """
        Args:
            http_client: Shared async HTTP client for the request
            access_token: Bearer token offered when an object is not public
            logger: Logger to report to; defaults to the library logger
        """
        self.http_client = http_client
        self.access_token = access_token
        self.logger = logger or get_library_logger()

    async def fetch(self, uri: str) -> bytes:
        """
        Download ``uri``.

        Tries without credentials first (most URIs are pre-signed or public),
        then once more with the bearer token on 401/403.

        Raises:
            httpx.HTTPError: If the object cannot be downloaded
        """
        url = gcs_uri_to_http(uri)
        self.logger.debug(f"Fetching artifact: {url}")
        response = await self.http_client.get(url, timeout=DOWNLOAD_TIMEOUT_SECONDS)
        if response.status_code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN) and self.access_token:
            self.logger.info("Artifact URI requires authorization; retrying with bearer token")
            response = await self.http_client.get(
                url,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=DOWNLOAD_TIMEOUT_SECONDS,
            )
        response.raise_for_status()
        self.logger.debug(f"Fetched {len(response.content)} bytes")
        return response.content


def _first_entry(response: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    entries = response.get(key)
    if isinstance(entries, list) and entries and isinstance(entries[0], dict):
        return entries[0]
    return None


class ArtifactExtractor:
    """Ordered fallback search for the video bytes in an operation response."""

    def __init__(self, fetcher: BlobFetcher, logger=None):
        self.fetcher = fetcher
        self.logger = logger or get_library_logger()

    async def extract(self, response: Optional[Dict[str, Any]]) -> Artifact:
        """
        Return the first video payload found in ``response``.

        Raises:
            NoArtifactError: If none of the known shapes carries a payload
        """
        body = response if isinstance(response, dict) else {}
        self.logger.debug(f"Response structure: {sorted(body.keys())}")

        video = _first_entry(body, "videos")
        prediction = _first_entry(body, "predictions")

        if video and video.get("gcsUri"):
            data = await self._fetch(video["gcsUri"], "videos")
            if data is not None:
                return Artifact(data=data)

        if video and video.get("bytesBase64Encoded"):
            data = self._decode(video["bytesBase64Encoded"], "videos")
            if data is not None:
                return Artifact(data=data)

        if prediction and prediction.get("bytesBase64Encoded"):
            data = self._decode(prediction["bytesBase64Encoded"], "predictions")
            if data is not None:
                return Artifact(data=data)

        if prediction and prediction.get("gcsUri"):
            data = await self._fetch(prediction["gcsUri"], "predictions")
            if data is not None:
                return Artifact(data=data)

        self.logger.error("No video data found in completed operation")
        self.logger.error(f"Full response: {json.dumps(response, default=str)[:2000]}")
        raise NoArtifactError("No video data in completed operation", response=response)

    async def _fetch(self, uri: Any, source: str) -> Optional[bytes]:
        if not isinstance(uri, str):
            self.logger.warning(f"Ignoring non-string storage URI in {source}: {uri!r}")
            return None
        self.logger.info(f"Fetching video from {source} storage URI: {uri}")
        try:
            return await self.fetcher.fetch(uri)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(f"Storage fetch failed for {uri}: {e}")
            return None

    def _decode(self, payload: Any, source: str) -> Optional[bytes]:
        if not isinstance(payload, str):
            self.logger.warning(f"Ignoring non-string base64 payload in {source}")
            return None
        self.logger.info(f"Using base64 encoded video from {source}")
        try:
            return base64.b64decode(payload)
        except (binascii.Error, ValueError) as e:
            self.logger.warning(f"Invalid base64 payload in {source}: {e}")
            return None
