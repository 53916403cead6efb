"""
Data model shared by the normalizer, the providers and the orchestrator.
"""
from __future__ import annotations

import base64
import random
import string
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

ProviderName = Literal["veo", "hedra", "kling"]

SUPPORTED_PROVIDERS = ("veo", "hedra", "kling")
DEFAULT_PROVIDER: ProviderName = "veo"
DEFAULT_COUNTRY = "United States"
DEFAULT_VIDEO_STYLE = "UGC Talking"
DEFAULT_VOICE_ACCENT = "american"
VIDEO_MIME_TYPE = "video/mp4"

_REQUEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_request_id() -> str:
    """Mint a correlation token: ``vid_<epoch millis>_<9 random chars>``."""
    suffix = "".join(random.choices(_REQUEST_ID_ALPHABET, k=9))
    return f"vid_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True)
class GenerationRequest:
    """Canonical, provider-agnostic description of one video to generate."""

    script_text: str
    reference_image: str
    direction: str = ""
    country: str = DEFAULT_COUNTRY
    provider: ProviderName = DEFAULT_PROVIDER
    video_style: str = DEFAULT_VIDEO_STYLE
    voice_accent: str = DEFAULT_VOICE_ACCENT
    style_params: Optional[Any] = None
    model: Optional[str] = None


@dataclass
class Operation:
    """Handle for a remote long-running job.

    Created by a submit call, updated only by poll calls, terminal once
    ``done`` is True.
    """

    name: str
    done: bool = False
    error: Optional[Dict[str, Any]] = None
    response: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, name: str, payload: Dict[str, Any]) -> "Operation":
        """Build an operation snapshot from a poll response body."""
        return cls(
            name=payload.get("name") or name,
            done=bool(payload.get("done")),
            error=payload.get("error") or None,
            response=payload.get("response"),
        )

    @property
    def error_message(self) -> str:
        if not self.error:
            return ""
        if isinstance(self.error, dict):
            return str(self.error.get("message") or self.error)
        return str(self.error)


@dataclass(frozen=True)
class Artifact:
    """Generated video payload."""

    data: bytes
    mime_type: str = VIDEO_MIME_TYPE

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass
class VideoResult:
    """What a completed generation hands back to the caller."""

    video_url: str
    video_base64: str
    provider: ProviderName
    request_id: str
    artifact: Optional[Artifact] = field(repr=False, default=None)

    @classmethod
    def from_artifact(cls, artifact: Artifact, provider: ProviderName, request_id: str) -> "VideoResult":
        return cls(
            video_url=artifact.to_data_uri(),
            video_base64=artifact.to_base64(),
            provider=provider,
            request_id=request_id,
            artifact=artifact,
        )
