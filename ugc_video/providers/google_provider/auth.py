"""
Google Cloud authentication for Vertex AI calls.

An AuthProvider yields ``(bearer_token, project_id)``. Sources, in the order
``AuthProvider.from_environment()`` tries them:

1. GOOGLE_SERVICE_ACCOUNT_JSON (inline service account JSON)
2. GOOGLE_APPLICATION_CREDENTIALS or ./service-account-key.json (key file)
3. VEO_ACCESS_TOKEN with VEO_PROJECT_ID / GOOGLE_CLOUD_PROJECT (static token)
4. GOOGLE_AUTH_USE_GCLOUD=1 with GOOGLE_CLOUD_PROJECT (gcloud CLI token)
"""

import asyncio
import json
import os
import subprocess
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Tuple

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from ...exceptions import AuthenticationError, ConfigurationError

SCOPES = ['https://www.googleapis.com/auth/cloud-platform']
DEFAULT_KEY_FILE = 'service-account-key.json'
TRUTHY = ('1', 'true', 'yes', 'on')


class AuthProvider(ABC):
	"""Supplies a bearer token and the project to bill Vertex AI calls to."""

	@abstractmethod
	async def get_credentials(self) -> Tuple[str, str]:
		"""
		Returns:
			(bearer_token, project_id)

		Raises:
			AuthenticationError: If no token can be obtained
		"""

	@classmethod
	def from_environment(cls) -> "AuthProvider":
		"""
		Build the first available provider from environment variables.

		Raises:
			ConfigurationError: If no credential is configured
		"""
		inline_json = os.getenv('GOOGLE_SERVICE_ACCOUNT_JSON')
		if inline_json:
			return ServiceAccountAuthProvider.from_json(inline_json)

		key_file = os.getenv('GOOGLE_APPLICATION_CREDENTIALS')
		if key_file:
			return ServiceAccountAuthProvider.from_file(key_file)
		if Path(DEFAULT_KEY_FILE).is_file():
			return ServiceAccountAuthProvider.from_file(DEFAULT_KEY_FILE)

		project_id = os.getenv('VEO_PROJECT_ID') or os.getenv('GOOGLE_CLOUD_PROJECT')
		access_token = os.getenv('VEO_ACCESS_TOKEN')
		if access_token:
			if not project_id:
				raise ConfigurationError(
					"VEO_ACCESS_TOKEN is set but no project is configured.\n"
					"Set VEO_PROJECT_ID or GOOGLE_CLOUD_PROJECT."
				)
			return StaticTokenAuthProvider(access_token, project_id)

		if os.getenv('GOOGLE_AUTH_USE_GCLOUD', '').lower() in TRUTHY:
			if not project_id:
				raise ConfigurationError("GOOGLE_AUTH_USE_GCLOUD requires GOOGLE_CLOUD_PROJECT")
			return GcloudAuthProvider(project_id)

		raise ConfigurationError(
			"Veo video generation requires a service account or VEO_ACCESS_TOKEN.\n"
			"Set GOOGLE_SERVICE_ACCOUNT_JSON, GOOGLE_APPLICATION_CREDENTIALS, or\n"
			"VEO_ACCESS_TOKEN with VEO_PROJECT_ID."
		)


class ServiceAccountAuthProvider(AuthProvider):
	"""Service account credentials; tokens are refreshed only when expired."""

	def __init__(self, info: Dict[str, Any]):
		self.project_id = info.get('project_id')
		if not self.project_id:
			raise ConfigurationError("Service account JSON has no project_id")
		try:
			self._credentials = service_account.Credentials.from_service_account_info(
				info, scopes=SCOPES
			)
		except ValueError as e:
			raise ConfigurationError(f"Invalid service account credentials: {e}") from e
		self._lock = threading.Lock()

	@classmethod
	def from_json(cls, text: str) -> "ServiceAccountAuthProvider":
		try:
			info = json.loads(text)
		except json.JSONDecodeError as e:
			raise ConfigurationError(f"Failed to parse GOOGLE_SERVICE_ACCOUNT_JSON: {e}") from e
		return cls(info)

	@classmethod
	def from_file(cls, path: str) -> "ServiceAccountAuthProvider":
		key_path = Path(path)
		if not key_path.is_file():
			raise ConfigurationError(f"Service account key file not found: {path}")
		return cls.from_json(key_path.read_text(encoding='utf-8'))

	@property
	def service_account_email(self) -> str:
		return self._credentials.service_account_email

	def _refresh_token(self) -> str:
		with self._lock:
			if not self._credentials.valid:
				try:
					self._credentials.refresh(Request())
				except google.auth.exceptions.GoogleAuthError as e:
					raise AuthenticationError(
						f"Failed to obtain access token for {self.service_account_email}: {e}",
						provider="veo",
					) from e
			return self._credentials.token

	async def get_credentials(self) -> Tuple[str, str]:
		# google-auth refreshes over blocking HTTP
		token = await asyncio.to_thread(self._refresh_token)
		return token, self.project_id


class StaticTokenAuthProvider(AuthProvider):
	"""A pre-minted access token, e.g. from a deployment secret."""

	def __init__(self, access_token: str, project_id: str):
		if not access_token:
			raise ConfigurationError("Access token cannot be empty")
		if not project_id:
			raise ConfigurationError("Project ID cannot be empty")
		self.access_token = access_token
		self.project_id = project_id

	async def get_credentials(self) -> Tuple[str, str]:
		return self.access_token, self.project_id


def get_gcloud_token() -> str:
	"""
	Get access token from gcloud CLI (application default credentials).

	Returns:
		str: Access token from gcloud

	Raises:
		AuthenticationError: If gcloud is not installed or not authenticated
	"""
	try:
		result = subprocess.run(
			['gcloud', 'auth', 'application-default', 'print-access-token'],
			capture_output=True,
			text=True,
			check=True
		)
	except FileNotFoundError:
		raise AuthenticationError(
			"gcloud CLI not found. Install it from: https://cloud.google.com/sdk/docs/install",
			provider="veo",
		)
	except subprocess.CalledProcessError as e:
		error_msg = e.stderr.strip() if e.stderr else "Unknown error"
		if "not authenticated" in error_msg.lower() or "login" in error_msg.lower():
			raise AuthenticationError(
				"gcloud not authenticated. Run: gcloud auth application-default login",
				provider="veo",
			)
		raise AuthenticationError(f"Failed to get gcloud token: {error_msg}", provider="veo")

	token = result.stdout.strip()
	if not token:
		raise AuthenticationError("gcloud returned empty token", provider="veo")
	return token


class GcloudAuthProvider(AuthProvider):
	"""Application default credentials via the gcloud CLI, for local runs."""

	def __init__(self, project_id: str):
		self.project_id = project_id

	async def get_credentials(self) -> Tuple[str, str]:
		token = await asyncio.to_thread(get_gcloud_token)
		return token, self.project_id
