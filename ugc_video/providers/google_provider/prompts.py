"""
Prompt synthesis for Veo talking-character clips.

The seed table keeps voice characteristics stable across the repeated 8
second segments of one campaign: every segment with the same accent gets the
same seed.
"""
from ...models import DEFAULT_COUNTRY, GenerationRequest

DEFAULT_STYLE = "UGC Talking"
DEFAULT_ACCENT = "american"
CLIP_DURATION_SECONDS = 8
ASPECT_RATIO = "9:16"

_NO_TEXT_OVERLAYS = "NO text overlays, NO titles, NO captions, NO subtitles on screen - clean visuals only"

STYLE_MODIFIERS = {
    "UGC Talking": (
        "Authentic user-generated content style, selfie camera angle, natural lighting, "
        "casual setting, direct eye contact with camera. " + _NO_TEXT_OVERLAYS
    ),
    "Narrative Voiceover": (
        "Cinematic storytelling style, smooth camera movements, establishing shots, "
        "documentary aesthetic, ambient lighting. " + _NO_TEXT_OVERLAYS
    ),
    "Cinematic": (
        "High-end commercial production, dramatic cinematic lighting, professional "
        "cinematography, premium aesthetic, shallow depth of field. " + _NO_TEXT_OVERLAYS
    ),
}

VOICE_SEEDS = {
    "american": 12345,
    "british": 23456,
    "australian": 34567,
    "indian": 45678,
    "south-african": 56789,
    "american-female": 67890,
    "british-female": 78901,
    "australian-female": 89012,
    "indian-female": 90123,
    "south-african-female": 11111,
}

VOICE_DESCRIPTIONS = {
    "american": "American accent",
    "british": "British accent",
    "australian": "Australian accent",
    "indian": "Indian accent",
    "south-african": "South African accent",
    "american-female": "American female accent",
    "british-female": "British female accent",
    "australian-female": "Australian female accent",
    "indian-female": "Indian female accent",
    "south-african-female": "South African female accent",
}

# Only the five primary accents are mapped; each lists the other four.
NEGATIVE_VOICE_PROMPTS = {
    "american": "British accent, Australian accent, Indian accent, South African accent",
    "british": "American accent, Australian accent, Indian accent, South African accent",
    "australian": "American accent, British accent, Indian accent, South African accent",
    "indian": "American accent, British accent, Australian accent, South African accent",
    "south-african": "American accent, British accent, Australian accent, Indian accent",
}


def voice_seed(voice_accent: str) -> int:
    """Deterministic seed for an accent; unknown accents use the american seed."""
    return VOICE_SEEDS.get(voice_accent, VOICE_SEEDS[DEFAULT_ACCENT])


def negative_voice_prompt(voice_accent: str) -> str:
    """Accents to steer away from; empty for female variants and unmapped accents."""
    return NEGATIVE_VOICE_PROMPTS.get(voice_accent, "")


def voice_description(voice_accent: str) -> str:
    return VOICE_DESCRIPTIONS.get(voice_accent, VOICE_DESCRIPTIONS[DEFAULT_ACCENT])


def style_modifier(video_style: str) -> str:
    return STYLE_MODIFIERS.get(video_style, STYLE_MODIFIERS[DEFAULT_STYLE])


def build_veo_prompt(request: GenerationRequest) -> str:
    """Compose the full text prompt for one Veo clip."""
    return (
        f"The SAME character from the image speaks with a clear "
        f"{voice_description(request.voice_accent)} in ALL segments. "
        f"They say: \"{request.script_text}\". "
        f"{request.direction}. "
        f"{style_modifier(request.video_style)}. "
        f"Setting: {request.country or DEFAULT_COUNTRY}. "
        f"{CLIP_DURATION_SECONDS} seconds duration. "
        f"Vertical {ASPECT_RATIO} aspect ratio video."
    )
