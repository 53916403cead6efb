"""
Inbound request normalization.

Two generations of clients send different field names for the same request:

- canonical: ``scriptText``, ``direction``, ``referenceImage``
- legacy: ``prompt`` (script and direction folded into one string) and
  ``imageUrl``

Legacy prompts follow a fixed textual convention::

    <direction>. Script: "<script text>". Style: <anything>

The delimiters are matched literally; clients depend on them.
"""
from typing import Any, Mapping, Optional, Tuple

from .exceptions import MissingFieldError, ValidationError
from .models import (
    DEFAULT_COUNTRY,
    DEFAULT_PROVIDER,
    DEFAULT_VIDEO_STYLE,
    DEFAULT_VOICE_ACCENT,
    SUPPORTED_PROVIDERS,
    GenerationRequest,
)

SCRIPT_START_MARKER = '. Script: "'
SCRIPT_END_MARKER = '". Style:'


def split_legacy_prompt(prompt: str) -> Tuple[str, str]:
    """
    Recover ``(script_text, direction)`` from a legacy prompt.

    When both markers are present the script is the text strictly between
    them and the direction is everything before the start marker. Otherwise
    the whole prompt is the script and the direction is empty.
    """
    start = prompt.find(SCRIPT_START_MARKER)
    if start == -1:
        return prompt, ""
    script_start = start + len(SCRIPT_START_MARKER)
    end = prompt.find(SCRIPT_END_MARKER, script_start)
    if end == -1:
        return prompt, ""
    return prompt[script_start:end], prompt[:start]


def _text(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _resolve_provider(value: Optional[Any]) -> str:
    if value is None or not str(value).strip():
        return DEFAULT_PROVIDER
    provider = str(value).strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ValidationError(
            f"Unsupported provider: {value}. Use one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    return provider


def normalize_request(raw: Mapping[str, Any]) -> GenerationRequest:
    """
    Reconcile an inbound payload into one :class:`GenerationRequest`.

    The inbound mapping is only read, never modified.

    Args:
        raw: Loosely-typed request body using either field convention

    Returns:
        The canonical request

    Raises:
        MissingFieldError: If no script text or no reference image can be
            resolved
        ValidationError: If the provider tag is not recognised
    """
    script_text = _text(raw, "scriptText")
    direction = _text(raw, "direction")
    prompt = _text(raw, "prompt")

    if prompt and not (script_text and direction):
        legacy_script, legacy_direction = split_legacy_prompt(prompt)
        script_text = script_text or legacy_script
        direction = direction or legacy_direction

    if not script_text.strip():
        raise MissingFieldError(
            "scriptText", "Missing required fields: scriptText or prompt"
        )

    reference_image = _text(raw, "referenceImage") or _text(raw, "imageUrl")
    if not reference_image:
        raise MissingFieldError(
            "referenceImage", "Missing required fields: referenceImage or imageUrl"
        )

    return GenerationRequest(
        script_text=script_text,
        direction=direction,
        reference_image=reference_image,
        country=_text(raw, "country") or DEFAULT_COUNTRY,
        provider=_resolve_provider(raw.get("provider")),
        video_style=_text(raw, "videoStyle") or DEFAULT_VIDEO_STYLE,
        voice_accent=_text(raw, "voiceAccent") or DEFAULT_VOICE_ACCENT,
        style_params=raw.get("styleParams"),
        model=_text(raw, "model") or None,
    )
