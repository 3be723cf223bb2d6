"""Common utilities for integrations."""

from .client import BaseAPIClient
from .exceptions import IntegrationAPIError, MissingConfiguration
from .utils import getenv

__all__ = [
    "BaseAPIClient",
    "IntegrationAPIError",
    "MissingConfiguration",
    "getenv",
]
