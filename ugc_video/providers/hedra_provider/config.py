"""Hedra configuration."""

import os
from dataclasses import dataclass

from ...exceptions import ConfigurationError

DEFAULT_HEDRA_BASE_URL = "https://api.hedra.com/v1"
DEFAULT_HEDRA_MODEL = "character-3"


@dataclass
class HedraConfig:
    """Configuration class for Hedra character video generation."""

    # API Configuration
    api_key: str
    base_url: str = DEFAULT_HEDRA_BASE_URL
    default_model: str = DEFAULT_HEDRA_MODEL

    # Fixed clip settings
    aspect_ratio: str = "9:16"
    duration_seconds: int = 8
    request_timeout: float = 60.0

    @classmethod
    def from_environment(cls) -> "HedraConfig":
        """
        Create configuration from environment variables.

        Raises:
            ConfigurationError: If HEDRA_API_KEY is not set
        """
        api_key = os.getenv("HEDRA_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "Missing HEDRA_API_KEY in environment or .env file\n"
                "Set it with: export HEDRA_API_KEY=your_key_here"
            )

        return cls(
            api_key=api_key,
            base_url=os.getenv("HEDRA_BASE_URL", DEFAULT_HEDRA_BASE_URL),
            default_model=os.getenv("HEDRA_MODEL", DEFAULT_HEDRA_MODEL),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If any configuration values are invalid
        """
        if not self.api_key:
            raise ConfigurationError("HEDRA_API_KEY not configured")
        if not self.base_url:
            raise ConfigurationError("Base URL cannot be empty")
        if self.duration_seconds <= 0:
            raise ConfigurationError("Duration must be positive")
