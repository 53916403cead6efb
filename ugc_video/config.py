"""
Configuration module for video generation providers.

Loads environment variables (and a local .env file) and builds the
per-provider configuration objects. Provider configs live next to their
clients under providers/*_provider/config.py.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from .models import SUPPORTED_PROVIDERS, ProviderName
from .exceptions import ValidationError
from .providers.google_provider import VeoConfig
from .providers.google_provider.auth import DEFAULT_KEY_FILE, TRUTHY
from .providers.hedra_provider import HedraConfig
from .providers.kling_provider import KlingConfig

load_dotenv()


def create_config_for_provider(provider: ProviderName):
    """
    Create appropriate configuration for the specified provider.

    Args:
        provider: The video generation provider to use

    Returns:
        Configuration instance for the specified provider

    Raises:
        ValidationError: If provider is not supported
        ConfigurationError: If a required credential is missing
    """
    config_map = {
        "veo": VeoConfig,
        "hedra": HedraConfig,
        "kling": KlingConfig,
    }

    config_class = config_map.get(provider)
    if not config_class:
        raise ValidationError(
            f"Unsupported provider: {provider}. Use one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    return config_class.from_environment()


def get_available_providers() -> list:
    """
    Get list of available providers based on environment configuration.

    Returns:
        List of provider names with credentials present
    """
    provider_checks = {
        "veo": lambda: bool(
            os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON") or
            os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or
            os.getenv("VEO_ACCESS_TOKEN") or
            os.getenv("GOOGLE_AUTH_USE_GCLOUD", "").lower() in TRUTHY or
            Path(DEFAULT_KEY_FILE).is_file()
        ),
        "hedra": lambda: bool(os.getenv("HEDRA_API_KEY")),
        "kling": lambda: bool(os.getenv("KLING_API_KEY")),
    }

    return [provider for provider, check in provider_checks.items() if check()]
