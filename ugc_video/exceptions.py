"""
Custom exceptions for UGC video generation.

Every failure aborts the single in-flight request. Nothing here is retried
automatically; callers own retry policy.
"""

from typing import Any, Optional


class VideoGenerationError(Exception):
    """Base exception for video generation errors.

    ``request_id`` is filled in by :func:`ugc_video.video_generator.generate_video`
    so every failure can be traced back to the inbound call that produced it.
    """

    def __init__(self, message: str, request_id: Optional[str] = None):
        self.request_id = request_id
        super().__init__(message)


class ValidationError(VideoGenerationError):
    """Exception for invalid inbound requests."""
    pass


class MissingFieldError(ValidationError):
    """A required request field is absent or empty after normalization."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class ConfigurationError(VideoGenerationError):
    """A required credential or API key is not configured."""
    pass


class APIError(VideoGenerationError):
    """Base exception for provider API errors.

    Carries the provider name, the HTTP status (when there was one) and the
    raw response body for diagnosis.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class AuthenticationError(APIError):
    """A configured credential could not produce an access token."""
    pass


class ProviderSubmitError(APIError):
    """The provider rejected the submission or returned no operation handle."""
    pass


class ProviderPollError(APIError):
    """A poll call failed at the transport level."""
    pass


class ProviderOperationError(APIError):
    """The remote operation finished with an error."""
    pass


class ProviderTimeoutError(APIError):
    """Polling exhausted its attempt ceiling before the operation finished."""

    def __init__(self, message: str, provider: Optional[str] = None, attempts: int = 0):
        self.attempts = attempts
        super().__init__(message, provider=provider)


class VideoProcessingError(VideoGenerationError):
    """Exception for video processing errors."""
    pass


class NoArtifactError(VideoProcessingError):
    """The operation succeeded but no video payload could be located.

    The full response body is attached so the unexpected shape can be
    inspected.
    """

    def __init__(self, message: str, response: Any = None):
        self.response = response
        super().__init__(message)


class ProviderNotImplementedError(VideoGenerationError, NotImplementedError):
    """The requested provider path has no implementation yet."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)
