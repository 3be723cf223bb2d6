"""
Base API client shared by the integrations.

Provides:
- httpx.AsyncClient lifecycle management
- Async context manager support
- Pydantic response decoding helpers
"""

from typing import Any, Self, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from .exceptions import IntegrationAPIError

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

# Voice platforms give a skill a few seconds to answer, so keep this short
DEFAULT_TIMEOUT_SECONDS = 5.0


class BaseAPIClient:
    """
    Base class for API clients using httpx.

    A transport can be passed in to route requests somewhere other than the
    network, which is how the tests fake the external APIs:

        async with GeocodingClient(transport=httpx.MockTransport(handler)) as c:
            await c.geocode(address="Oslo")
    """

    client: httpx.AsyncClient | None

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.transport = transport
        self.timeout = timeout
        self.client = None

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> Self:
        self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if not self.client:
            self.client = httpx.AsyncClient(
                transport=self.transport, timeout=self.timeout
            )
        return self.client

    # ======================
    # Response decoding
    # ======================

    def _decode_json(
        self, response: httpx.Response, response_type: type[T]
    ) -> T:
        """
        Decode a JSON response into a Pydantic model.

        Uses model_validate_json for efficiency (single parse).
        """
        try:
            return response_type.model_validate_json(response.text)
        except ValidationError as e:
            logger.error(
                "Unexpected response body",
                url=str(response.request.url),
                response_type=response_type.__name__,
            )
            raise IntegrationAPIError(
                f"Unable to decode {response_type.__name__}: {e}"
            ) from e
