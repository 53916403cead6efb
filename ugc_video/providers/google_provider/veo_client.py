"""
Google Veo client for Vertex AI long-running predictions.

Submits one single-instance image-to-video prediction, then follows the
returned operation through :class:`OperationPoller` and pulls the video out
of the finished operation with :class:`ArtifactExtractor`.

Wire format::

    POST ...:predictLongRunning
    {"instances": [{"prompt": str,
                    "image": {"bytesBase64Encoded": str, "mimeType": str}}],
     "parameters": {"aspectRatio", "resizeMode", "sampleCount",
                    "durationSeconds", "resolution", "personGeneration",
                    "seed", "negativePrompt"}}
    -> {"name": str, "error"?: {...}}

    POST ...:fetchPredictOperation  {"operationName": str}
    -> {"done": bool, "error"?: {...}, "response"?: {...}}
"""

import json
from typing import Any, Dict, Optional

import httpx

from .auth import AuthProvider
from .config import VeoConfig
from .prompts import (
    ASPECT_RATIO,
    CLIP_DURATION_SECONDS,
    build_veo_prompt,
    negative_voice_prompt,
    voice_seed,
)
from ..base import (
    ERROR_RESPONSE_PREVIEW_LENGTH,
    BaseVideoProvider,
    error_message_from_body,
    read_json_body,
)
from ...artifact_extractor import ArtifactExtractor, BlobFetcher
from ...exceptions import MissingFieldError, ProviderPollError, ProviderSubmitError
from ...media_utils import split_image_data_uri
from ...models import Artifact, GenerationRequest, Operation
from ...operation_poller import OperationPoller

RESIZE_MODE = "crop"
SAMPLE_COUNT = 1
RESOLUTION = "720p"
PERSON_GENERATION = "allow_adult"


class VeoAPIClient(BaseVideoProvider):
    """Google Veo client: submit, poll the operation, extract the video."""

    name = "veo"

    def __init__(
        self,
        auth_provider: AuthProvider,
        http_client: httpx.AsyncClient,
        config: Optional[VeoConfig] = None,
        logger=None,
    ):
        """
        Initialize the Veo API client.

        Args:
            auth_provider: Source of the bearer token and project ID
            http_client: Async HTTP client shared for the request
            config: Veo settings; defaults come from the environment
            logger: Request-scoped logger
        """
        super().__init__(logger)
        self.auth_provider = auth_provider
        self.http_client = http_client
        self.config = config or VeoConfig.from_environment()
        self.config.validate()

        self._access_token: Optional[str] = None
        self._project_id: Optional[str] = None

        self.logger.debug(f"VeoAPIClient initialized: location={self.config.location}, model={self.config.model}")

    def build_request_body(self, request: GenerationRequest) -> Dict[str, Any]:
        """
        Build the predictLongRunning payload for one request.

        Raises:
            MissingFieldError: If the reference image carries no data
        """
        mime_type, image_base64 = split_image_data_uri(request.reference_image)
        if not image_base64:
            raise MissingFieldError("referenceImage", "Invalid reference image data")

        return {
            "instances": [{
                "prompt": build_veo_prompt(request),
                "image": {
                    "bytesBase64Encoded": image_base64,
                    "mimeType": mime_type,
                },
            }],
            "parameters": {
                "aspectRatio": ASPECT_RATIO,
                "resizeMode": RESIZE_MODE,
                "sampleCount": SAMPLE_COUNT,
                "durationSeconds": CLIP_DURATION_SECONDS,
                "resolution": RESOLUTION,
                "personGeneration": PERSON_GENERATION,
                "seed": voice_seed(request.voice_accent),
                "negativePrompt": negative_voice_prompt(request.voice_accent),
            },
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

    async def submit(self, request: GenerationRequest) -> Operation:
        """
        Start a Veo generation.

        Raises:
            ProviderSubmitError: On a non-success status, an ``error`` in the
                response, or a response without an operation name
        """
        body = self.build_request_body(request)

        self._access_token, self._project_id = await self.auth_provider.get_credentials()
        self.logger.info(f"Project: {self._project_id}, Location: {self.config.location}, Model: {self.config.model}")

        parameters = body["parameters"]
        self.logger.info("Request body summary:")
        self.logger.info(f"  - Style: {request.video_style}")
        self.logger.info(f"  - Voice: {request.voice_accent} (seed {parameters['seed']})")
        self.logger.info(f"  - Image mime type: {body['instances'][0]['image']['mimeType']}")
        self.logger.info(f"  - Aspect ratio: {parameters['aspectRatio']}, {parameters['durationSeconds']}s, {parameters['resolution']}")
        self.logger.debug(f"Prompt: {body['instances'][0]['prompt'][:100]}...")

        url = self.config.predict_url(self._project_id)
        self.logger.info(f"Calling Vertex AI Veo API: {url}")
        try:
            response = await self.http_client.post(
                url, headers=self._headers(), json=body, timeout=self.config.request_timeout
            )
        except httpx.HTTPError as e:
            raise ProviderSubmitError(f"Veo API request failed: {e}", provider=self.name) from e

        self.logger.info(f"Initial response status: {response.status_code}")
        if not response.is_success:
            self.logger.error(f"Veo API error response: {response.text[:ERROR_RESPONSE_PREVIEW_LENGTH]}")
            raise ProviderSubmitError(
                f"Veo API error: {response.status_code} - {error_message_from_body(response)}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            operation = read_json_body(response)
        except ValueError as e:
            raise ProviderSubmitError(
                f"Invalid JSON response from Veo: {e}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            ) from e

        if operation.get("error"):
            self.logger.error(f"Operation error: {operation['error']}")
            message = Operation(name="", error=operation["error"]).error_message
            raise ProviderSubmitError(
                f"Veo API error: {message}",
                provider=self.name,
                status_code=response.status_code,
                body=operation,
            )

        operation_name = operation.get("name")
        if not operation_name:
            self.logger.error(f"No operation name returned: {json.dumps(operation)[:ERROR_RESPONSE_PREVIEW_LENGTH]}")
            raise ProviderSubmitError(
                "No operation name returned from Veo API",
                provider=self.name,
                status_code=response.status_code,
                body=operation,
            )

        return Operation(name=operation_name)

    async def poll(self, operation_name: str) -> Operation:
        """
        Fetch the current state of an operation once.

        Raises:
            ProviderPollError: On transport failure or a non-success status
        """
        url = self.config.fetch_operation_url(self._project_id)
        try:
            response = await self.http_client.post(
                url,
                headers=self._headers(),
                json={"operationName": operation_name},
                timeout=self.config.request_timeout,
            )
        except httpx.HTTPError as e:
            raise ProviderPollError(f"Poll error: {e}", provider=self.name) from e

        if not response.is_success:
            self.logger.error(f"Poll error response: {response.text[:ERROR_RESPONSE_PREVIEW_LENGTH]}")
            raise ProviderPollError(
                f"Poll error: {response.status_code} - {error_message_from_body(response)}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = read_json_body(response)
        except ValueError as e:
            raise ProviderPollError(
                f"Invalid JSON poll response from Veo: {e}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            ) from e

        self.logger.debug(f"Poll response done: {bool(payload.get('done'))}")
        return Operation.from_payload(operation_name, payload)

    async def await_completion(self, operation: Operation) -> Operation:
        poller = OperationPoller(self.poll, provider=self.name, logger=self.logger)
        return await poller.wait(operation)

    async def extract_artifact(self, operation: Operation) -> Artifact:
        fetcher = BlobFetcher(self.http_client, access_token=self._access_token, logger=self.logger)
        extractor = ArtifactExtractor(fetcher, logger=self.logger)
        return await extractor.extract(operation.response)
