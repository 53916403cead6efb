"""
Narration audio for Hedra character videos.

Hedra animates a character against an audio track, so the script has to be
spoken first. No speech backend is wired in yet: the placeholder returns a
fixed audio reference and warns on every use so the gap stays visible.
"""
from abc import ABC, abstractmethod

from ...logger import get_library_logger

PLACEHOLDER_AUDIO_URL = "https://placeholder-audio-url.mp3"


class SpeechSynthesizer(ABC):
    """Turns script text into a hosted audio file Hedra can fetch."""

    @abstractmethod
    async def synthesize(self, text: str, voice_accent: str) -> str:
        """
        Speak ``text`` in the given accent.

        Args:
            text: Script text to narrate
            voice_accent: Accent key, e.g. ``"british-female"``

        Returns:
            URL of the synthesized audio
        """


class PlaceholderSpeechSynthesizer(SpeechSynthesizer):
    """Stand-in until a real TTS backend is configured."""

    def __init__(self, logger=None):
        self.logger = logger or get_library_logger()

    async def synthesize(self, text: str, voice_accent: str) -> str:
        self.logger.warning(
            f"No TTS backend configured; using placeholder audio for "
            f"'{text[:50]}...' (accent: {voice_accent})"
        )
        return PLACEHOLDER_AUDIO_URL
