"""
Provider modules for video generation backends.

Each provider module is named with a '_provider' suffix to prevent package
shadowing issues with standard Python packages from PyPI.

Provider Modules:
- google_provider: Google Veo image-to-video on Vertex AI
  - Service account, static token or gcloud CLI authentication
  - Long-running operation polled via fetchPredictOperation
- hedra_provider: Hedra character videos
  - Character, narration and video job per request
  - Status polling every 2 seconds
- kling_provider: Kling (credentials only, generation not implemented)

All providers export their API client class and configuration class.
Routing between them lives in providers/dispatcher.py.
"""

from .base import BaseVideoProvider
from .google_provider import VeoAPIClient
from .hedra_provider import HedraAPIClient
from .kling_provider import KlingAPIClient

__all__ = [
    'BaseVideoProvider',
    'VeoAPIClient',
    'HedraAPIClient',
    'KlingAPIClient',
]
