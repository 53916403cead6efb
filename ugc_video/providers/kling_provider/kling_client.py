"""
Kling video client.

Credentials are checked up front, but the Kling submission protocol has not
been implemented: every generation step raises ProviderNotImplementedError.
"""

from .config import KlingConfig
from ..base import BaseVideoProvider
from ...exceptions import ProviderNotImplementedError
from ...models import Artifact, GenerationRequest, Operation

NOT_IMPLEMENTED_MESSAGE = "Kling integration not yet implemented"


class KlingAPIClient(BaseVideoProvider):
    """Kling provider placeholder."""

    name = "kling"

    def __init__(self, config: KlingConfig, logger=None):
        super().__init__(logger)
        config.validate()
        self.config = config

    async def submit(self, request: GenerationRequest) -> Operation:
        self.logger.info("Kling video generation:")
        self.logger.info(f"  Style: {request.video_style}")
        self.logger.info(f"  Voice: {request.voice_accent}")
        raise ProviderNotImplementedError(NOT_IMPLEMENTED_MESSAGE, provider=self.name)

    async def await_completion(self, operation: Operation) -> Operation:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED_MESSAGE, provider=self.name)

    async def extract_artifact(self, operation: Operation) -> Artifact:
        raise ProviderNotImplementedError(NOT_IMPLEMENTED_MESSAGE, provider=self.name)
