"""
UGC Video Generator Package

Turns a short script and a reference image into a vertical 8-second talking
video through one of several third-party generation services:
- Veo (Google Vertex AI)
- Hedra (character videos)
- Kling (not yet implemented)

Core Modules:
- video_generator: generate_video() entry point with per-request ids
- request_normalizer: canonical and legacy request field reconciliation
- operation_poller: bounded polling of long-running operations
- artifact_extractor: locating video bytes in finished operation responses
- config: environment loading and per-provider configuration
- exceptions: error taxonomy shared by every component
- logger: centralized logging infrastructure

Provider Modules:
- providers/google_provider: Veo client, prompts and Google authentication
- providers/hedra_provider: Hedra client and narration interface
- providers/kling_provider: Kling credentials check
- providers/dispatcher: routing from provider tag to client
"""

__version__ = "1.0.0"

from .video_generator import generate_video
from .request_normalizer import normalize_request
from .models import Artifact, GenerationRequest, Operation, VideoResult, new_request_id
from .config import create_config_for_provider, get_available_providers
from .logger import init_library_logger, get_library_logger
from .exceptions import (
    VideoGenerationError,
    ValidationError,
    MissingFieldError,
    ConfigurationError,
    APIError,
    AuthenticationError,
    ProviderSubmitError,
    ProviderPollError,
    ProviderOperationError,
    ProviderTimeoutError,
    VideoProcessingError,
    NoArtifactError,
    ProviderNotImplementedError,
)

__all__ = [
    'generate_video',
    'normalize_request',
    'Artifact',
    'GenerationRequest',
    'Operation',
    'VideoResult',
    'new_request_id',
    'create_config_for_provider',
    'get_available_providers',
    'init_library_logger',
    'get_library_logger',
    'VideoGenerationError',
    'ValidationError',
    'MissingFieldError',
    'ConfigurationError',
    'APIError',
    'AuthenticationError',
    'ProviderSubmitError',
    'ProviderPollError',
    'ProviderOperationError',
    'ProviderTimeoutError',
    'VideoProcessingError',
    'NoArtifactError',
    'ProviderNotImplementedError',
]
