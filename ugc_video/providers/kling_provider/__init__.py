"""Kling provider (credentials only; generation not implemented)."""

from .config import KlingConfig
from .kling_client import KlingAPIClient

__all__ = ["KlingAPIClient", "KlingConfig"]
