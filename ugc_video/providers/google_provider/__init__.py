"""Google provider for Veo video generation on Vertex AI."""

from .auth import AuthProvider, GcloudAuthProvider, ServiceAccountAuthProvider, StaticTokenAuthProvider
from .config import VeoConfig
from .veo_client import VeoAPIClient

__all__ = [
    "AuthProvider",
    "GcloudAuthProvider",
    "ServiceAccountAuthProvider",
    "StaticTokenAuthProvider",
    "VeoAPIClient",
    "VeoConfig",
]
