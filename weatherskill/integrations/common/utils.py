"""Common utility functions for integrations."""

import os

from .exceptions import MissingConfiguration


def getenv(key: str) -> str:
    """
    Get a required environment variable.

    Raises MissingConfiguration, a KeyError, if the variable is not set.
    """
    if value := os.getenv(key):
        return value

    raise MissingConfiguration(key)
