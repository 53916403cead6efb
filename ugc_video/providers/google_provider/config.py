"""Google Veo configuration."""

import os
from dataclasses import dataclass

from ...exceptions import ConfigurationError

DEFAULT_VEO_MODEL = "veo-3.1-fast-generate-001"
DEFAULT_LOCATION = "us-central1"


@dataclass
class VeoConfig:
	"""Configuration class for Google Veo video generation on Vertex AI."""

	location: str = DEFAULT_LOCATION
	model: str = DEFAULT_VEO_MODEL
	request_timeout: float = 60.0  # seconds, per submit/poll call

	@classmethod
	def from_environment(cls) -> "VeoConfig":
		"""
		Create configuration from environment variables.

		Credentials are not part of this config; see auth.AuthProvider.

		Returns:
			VeoConfig: Configuration instance
		"""
		location = (
			os.getenv("GOOGLE_CLOUD_LOCATION") or
			os.getenv("VEO_LOCATION") or
			DEFAULT_LOCATION
		)
		model = os.getenv("VEO_MODEL") or DEFAULT_VEO_MODEL
		return cls(location=location, model=model)

	def validate(self) -> None:
		"""
		Validate configuration values.

		Raises:
			ConfigurationError: If any configuration values are invalid
		"""
		if not self.location:
			raise ConfigurationError("Location cannot be empty")
		if not self.model:
			raise ConfigurationError("Veo model cannot be empty")
		if self.request_timeout <= 0:
			raise ConfigurationError("Request timeout must be positive")

	@property
	def base_url(self) -> str:
		return f"https://{self.location}-aiplatform.googleapis.com/v1"

	def model_path(self, project_id: str) -> str:
		return (
			f"{self.base_url}/projects/{project_id}/locations/{self.location}"
			f"/publishers/google/models/{self.model}"
		)

	def predict_url(self, project_id: str) -> str:
		"""Long-running prediction (submit) endpoint."""
		return f"{self.model_path(project_id)}:predictLongRunning"

	def fetch_operation_url(self, project_id: str) -> str:
		"""Operation poll endpoint; takes ``{"operationName": ...}`` in a POST body."""
		return f"{self.model_path(project_id)}:fetchPredictOperation"
