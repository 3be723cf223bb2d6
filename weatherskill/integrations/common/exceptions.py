"""Common exception classes for integrations."""


class IntegrationAPIError(Exception):
    """Base exception for all integration API errors."""

    pass


class MissingConfiguration(KeyError):
    """A required environment variable is not set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Environment variable {key} not set")
        self.key = key
