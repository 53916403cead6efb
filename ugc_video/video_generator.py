"""
Main video generation orchestration module.

:func:`generate_video` is the single inbound entry point: it mints the
request id, normalizes the loosely-typed request body, routes it to a
provider and returns the finished video as a data URI.

Every failure propagates as a :class:`VideoGenerationError` subclass with
the request id attached; nothing is retried here.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Optional

import httpx

from .exceptions import VideoGenerationError
from .logger import get_request_logger
from .models import VideoResult, new_request_id
from .providers.dispatcher import ProviderDispatcher
from .providers.google_provider import AuthProvider
from .providers.hedra_provider import SpeechSynthesizer
from .request_normalizer import normalize_request


@asynccontextmanager
async def _http_client(http_client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    # A caller-supplied client is borrowed, never closed here
    if http_client is not None:
        yield http_client
        return
    async with httpx.AsyncClient() as client:
        yield client


async def generate_video(
    raw_request: Mapping[str, Any],
    *,
    auth_provider: Optional[AuthProvider] = None,
    speech_synthesizer: Optional[SpeechSynthesizer] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    request_id: Optional[str] = None,
) -> VideoResult:
    """
    Generate one UGC video from an inbound request body.

    Args:
        raw_request: Request body using canonical (``scriptText``,
            ``direction``, ``referenceImage``) or legacy (``prompt``,
            ``imageUrl``) field names
        auth_provider: Google credentials for Veo. Defaults to the first
            source found in the environment.
        speech_synthesizer: Narration backend for Hedra. Defaults to the
            placeholder.
        http_client: Async HTTP client to use. A private one is opened and
            closed when omitted.
        request_id: Correlation token. Minted when omitted.

    Returns:
        VideoResult with the video as a data URI and as bare base64

    Raises:
        MissingFieldError: If script text or reference image is missing
        ValidationError: If the provider tag is not recognised
        ConfigurationError: If the provider's credentials are missing
        APIError: If a provider call fails, the job fails or polling times out
        NoArtifactError: If the finished job carries no video
        ProviderNotImplementedError: For providers without an implementation
    """
    request_id = request_id or new_request_id()
    logger = get_request_logger(request_id)
    logger.info("=== VIDEO GENERATION REQUEST START ===")

    try:
        request = normalize_request(raw_request)
        logger.info(f"Provider: {request.provider}")
        logger.info(f"Script: {request.script_text[:50]}...")
        logger.debug(f"Direction: {request.direction[:50]}")
        logger.debug(f"Country: {request.country}, Style: {request.video_style}, Voice: {request.voice_accent}")

        async with _http_client(http_client) as client:
            dispatcher = ProviderDispatcher(
                client,
                auth_provider=auth_provider,
                speech_synthesizer=speech_synthesizer,
                logger=logger,
            )
            artifact = await dispatcher.generate(request)
    except VideoGenerationError as e:
        e.request_id = request_id
        logger.error(f"Video generation failed: {type(e).__name__}: {e}")
        raise

    logger.info(f"Video generated successfully ({len(artifact.data)} bytes)")
    return VideoResult.from_artifact(artifact, provider=request.provider, request_id=request_id)
