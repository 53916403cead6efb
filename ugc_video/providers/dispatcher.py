"""
Route a canonical request to the provider that serves it.

The provider tag is resolved once per request; the chosen client then runs
its own submit, poll and extract sequence.
"""
from typing import Optional

import httpx

from .base import BaseVideoProvider
from .google_provider import AuthProvider, VeoAPIClient
from .hedra_provider import HedraAPIClient, SpeechSynthesizer
from .kling_provider import KlingAPIClient
from ..config import create_config_for_provider
from ..exceptions import ValidationError
from ..logger import get_library_logger
from ..models import SUPPORTED_PROVIDERS, Artifact, GenerationRequest


class ProviderDispatcher:
    """Builds provider clients for one request and runs the selected one."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        auth_provider: Optional[AuthProvider] = None,
        speech_synthesizer: Optional[SpeechSynthesizer] = None,
        logger=None,
    ):
        """
        Args:
            http_client: Async HTTP client shared by every call of the request
            auth_provider: Google credentials for Veo; read from the
                environment when omitted
            speech_synthesizer: Narration backend for Hedra
            logger: Request-scoped logger
        """
        self.http_client = http_client
        self.auth_provider = auth_provider
        self.speech_synthesizer = speech_synthesizer
        self.logger = logger or get_library_logger()

    def get_provider(self, provider: str) -> BaseVideoProvider:
        """
        Build the client for ``provider``.

        Raises:
            ValidationError: If the provider tag is not supported
            ConfigurationError: If the provider's credentials are missing
        """
        if provider == "veo":
            auth_provider = self.auth_provider or AuthProvider.from_environment()
            return VeoAPIClient(
                auth_provider,
                self.http_client,
                config=create_config_for_provider("veo"),
                logger=self.logger,
            )
        elif provider == "hedra":
            return HedraAPIClient(
                create_config_for_provider("hedra"),
                self.http_client,
                speech_synthesizer=self.speech_synthesizer,
                logger=self.logger,
            )
        elif provider == "kling":
            return KlingAPIClient(create_config_for_provider("kling"), logger=self.logger)
        else:
            raise ValidationError(
                f"Unsupported provider: {provider}. Use one of: {', '.join(SUPPORTED_PROVIDERS)}"
            )

    async def generate(self, request: GenerationRequest) -> Artifact:
        self.logger.info(f"Starting video generation with provider: {request.provider}")
        client = self.get_provider(request.provider)
        return await client.generate(request)
