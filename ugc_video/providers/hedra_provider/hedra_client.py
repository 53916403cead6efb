"""
Hedra character video client.

Three-step submission: create a character from the reference image, narrate
the script, then create a video that pairs the two. The video job is polled
on its status endpoint until it completes with a ``video_url``.
"""

import asyncio
from typing import Any, Dict, Optional

import httpx

from .config import HedraConfig
from .tts import PlaceholderSpeechSynthesizer, SpeechSynthesizer
from ..base import BaseVideoProvider, error_message_from_body, read_json_body
from ...artifact_extractor import BlobFetcher
from ...exceptions import (
    NoArtifactError,
    ProviderOperationError,
    ProviderPollError,
    ProviderSubmitError,
    ProviderTimeoutError,
)
from ...media_utils import split_image_data_uri
from ...models import Artifact, GenerationRequest, Operation

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


class HedraAPIClient(BaseVideoProvider):
    """Hedra client: character + narration + video job, then status polling."""

    name = "hedra"

    POLL_INTERVAL_SECONDS = 2
    MAX_ATTEMPTS = 30

    def __init__(
        self,
        config: HedraConfig,
        http_client: httpx.AsyncClient,
        speech_synthesizer: Optional[SpeechSynthesizer] = None,
        logger=None,
    ):
        """
        Initialize the Hedra API client.

        Args:
            config: Hedra credentials and settings
            http_client: Async HTTP client shared for the request
            speech_synthesizer: Narration backend; a placeholder when omitted
            logger: Request-scoped logger

        Raises:
            ConfigurationError: If the API key is missing
        """
        super().__init__(logger)
        config.validate()
        self.config = config
        self.http_client = http_client
        self.speech_synthesizer = speech_synthesizer or PlaceholderSpeechSynthesizer(logger=self.logger)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, payload: Dict[str, Any], step: str) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        try:
            response = await self.http_client.post(
                url, headers=self._headers(), json=payload, timeout=self.config.request_timeout
            )
        except httpx.HTTPError as e:
            raise ProviderSubmitError(f"Hedra {step} request failed: {e}", provider=self.name) from e

        if not response.is_success:
            raise ProviderSubmitError(
                f"Hedra {step} error: {error_message_from_body(response)}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return read_json_body(response)
        except ValueError as e:
            raise ProviderSubmitError(
                f"Invalid JSON from Hedra {step}: {e}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def create_character(self, request: GenerationRequest) -> str:
        model = request.model or self.config.default_model
        _, image_base64 = split_image_data_uri(request.reference_image)
        self.logger.info(f"Creating Hedra character with model: {model}")
        data = await self._post(
            "/characters",
            {"image": image_base64, "aspect_ratio": self.config.aspect_ratio, "model": model},
            "init",
        )
        character_id = data.get("character_id")
        if not character_id:
            raise ProviderSubmitError("No character_id returned from Hedra", provider=self.name, body=data)
        return character_id

    async def create_video(self, character_id: str, audio_url: str, direction: str) -> str:
        data = await self._post(
            "/videos",
            {
                "character_id": character_id,
                "audio_url": audio_url,
                "motion_description": direction,
                "duration": self.config.duration_seconds,
            },
            "video",
        )
        video_id = data.get("video_id")
        if not video_id:
            raise ProviderSubmitError("No video_id returned from Hedra", provider=self.name, body=data)
        return video_id

    async def submit(self, request: GenerationRequest) -> Operation:
        character_id = await self.create_character(request)
        self.logger.info(f"Hedra character created: {character_id}")

        audio_url = await self.speech_synthesizer.synthesize(request.script_text, request.voice_accent)
        self.logger.debug(f"Narration audio: {audio_url}")

        video_id = await self.create_video(character_id, audio_url, request.direction)
        return Operation(name=video_id)

    async def poll(self, video_id: str) -> Operation:
        """
        Read the video job status once.

        ``completed`` counts as done only once a ``video_url`` is present.

        Raises:
            ProviderPollError: On transport failure or a non-success status
        """
        url = f"{self.config.base_url}/videos/{video_id}"
        try:
            response = await self.http_client.get(
                url,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
                timeout=self.config.request_timeout,
            )
        except httpx.HTTPError as e:
            raise ProviderPollError(f"Poll error: {e}", provider=self.name) from e

        if not response.is_success:
            raise ProviderPollError(
                f"Poll error: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            )
        try:
            data = read_json_body(response)
        except ValueError as e:
            raise ProviderPollError(
                f"Invalid JSON poll response from Hedra: {e}",
                provider=self.name,
                status_code=response.status_code,
                body=response.text,
            ) from e

        status = data.get("status")
        if status == STATUS_COMPLETED and data.get("video_url"):
            return Operation(name=video_id, done=True, response=data)
        if status == STATUS_FAILED:
            error = data.get("error") or {"message": "Hedra video generation failed"}
            return Operation(name=video_id, done=True, error=error, response=data)
        return Operation(name=video_id, response=data)

    async def await_completion(self, operation: Operation) -> Operation:
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            self.logger.info(f"Hedra poll attempt {attempt}/{self.MAX_ATTEMPTS}...")
            current = await self.poll(operation.name)
            if current.done:
                if current.error:
                    raise ProviderOperationError(
                        f"Hedra video generation failed: {current.error_message}",
                        provider=self.name,
                        body=current.response,
                    )
                return current
            if attempt < self.MAX_ATTEMPTS:
                await asyncio.sleep(self.POLL_INTERVAL_SECONDS)

        raise ProviderTimeoutError(
            "Hedra video generation timed out",
            provider=self.name,
            attempts=self.MAX_ATTEMPTS,
        )

    async def extract_artifact(self, operation: Operation) -> Artifact:
        video_url = (operation.response or {}).get("video_url")
        if not video_url or not isinstance(video_url, str):
            raise NoArtifactError("Hedra job completed without a video_url", response=operation.response)

        fetcher = BlobFetcher(self.http_client, logger=self.logger)
        try:
            data = await fetcher.fetch(video_url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NoArtifactError(
                f"Failed to download Hedra video from {video_url}: {e}",
                response=operation.response,
            ) from e
        return Artifact(data=data)
