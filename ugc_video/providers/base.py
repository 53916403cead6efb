"""
Common contract for video generation providers.

The providers share no request or response shape. Each one implements the
same three steps (submit, await completion, extract the artifact) against its
own API, and :meth:`BaseVideoProvider.generate` chains them.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

import httpx

from ..logger import get_library_logger
from ..models import Artifact, GenerationRequest, Operation

# Response Truncation Limits
ERROR_RESPONSE_PREVIEW_LENGTH = 500


def read_json_body(response: httpx.Response) -> Dict[str, Any]:
    """
    Decode a JSON object response body.

    Raises:
        ValueError: If the body is not a JSON object
    """
    body = response.json()
    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
    return body


def error_message_from_body(response: httpx.Response) -> str:
    """Best-effort human readable error from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:ERROR_RESPONSE_PREVIEW_LENGTH] or str(response.status_code)
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
        if error:
            return str(error)
    return response.text[:ERROR_RESPONSE_PREVIEW_LENGTH]


class BaseVideoProvider(ABC):
    """One provider's submit/poll/extract protocol."""

    name: str = ""

    def __init__(self, logger=None):
        self.logger = logger or get_library_logger()

    @abstractmethod
    async def submit(self, request: GenerationRequest) -> Operation:
        """Start a generation job and return its operation handle."""

    @abstractmethod
    async def await_completion(self, operation: Operation) -> Operation:
        """Poll ``operation`` until it reaches a successful terminal state."""

    @abstractmethod
    async def extract_artifact(self, operation: Operation) -> Artifact:
        """Turn a completed operation into the video artifact."""

    async def generate(self, request: GenerationRequest) -> Artifact:
        """
        Run the full sequence for one request.

        Submit strictly precedes the first poll and polls never overlap.
        """
        self.logger.info(f"=== {self.name.upper()} VIDEO GENERATION START ===")
        operation = await self.submit(request)
        self.logger.info(f"Operation started: {operation.name}")
        operation = await self.await_completion(operation)
        artifact = await self.extract_artifact(operation)
        self.logger.info(f"Artifact ready: {len(artifact.data)} bytes ({artifact.mime_type})")
        return artifact
