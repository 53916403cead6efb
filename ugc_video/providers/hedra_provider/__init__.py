"""Hedra provider for character video generation."""

from .config import HedraConfig
from .hedra_client import HedraAPIClient
from .tts import PlaceholderSpeechSynthesizer, SpeechSynthesizer

__all__ = ["HedraAPIClient", "HedraConfig", "PlaceholderSpeechSynthesizer", "SpeechSynthesizer"]
