"""Kling configuration."""

import os
from dataclasses import dataclass

from ...exceptions import ConfigurationError


@dataclass
class KlingConfig:
    """Configuration class for Kling video generation."""

    api_key: str

    @classmethod
    def from_environment(cls) -> "KlingConfig":
        """
        Create configuration from environment variables.

        Raises:
            ConfigurationError: If KLING_API_KEY is not set
        """
        api_key = os.getenv("KLING_API_KEY")
        if not api_key:
            raise ConfigurationError("KLING_API_KEY not configured")
        return cls(api_key=api_key)

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigurationError("KLING_API_KEY not configured")
