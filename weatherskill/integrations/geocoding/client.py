import httpx
import structlog

from ...utils import timed
from ..common import BaseAPIClient, getenv
from .exceptions import GeocodingAPIError, LocationNotFound
from .types import GeocodedLocation, GeocodingResponse

logger = structlog.get_logger()

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GeocodingClient(BaseAPIClient):
    """
    A client for the Google Maps geocoding API.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(transport=transport)
        self.api_key = api_key or getenv("MAPS_API_KEY")

    async def geocode(self, *, address: str) -> GeocodedLocation:
        """
        Resolve a free text address to a coordinate. The first result
        returned by the API is used.
        """
        client = self._get_client()

        with timed("Geocode address", address=address):
            response = await client.get(
                GEOCODE_URL, params={"address": address, "key": self.api_key}
            )

        if response.status_code >= 400:
            raise GeocodingAPIError(
                f"Geocoding request failed with status {response.status_code}"
            )

        data = self._decode_json(response, GeocodingResponse)

        if data.status != "OK" or not data.results:
            logger.info(
                "Address not geocoded",
                address=address,
                status=data.status,
                error_message=data.error_message,
            )
            raise LocationNotFound(address, data.status)

        result = data.results[0]
        return GeocodedLocation(
            latitude=result.geometry.location.lat,
            longitude=result.geometry.location.lng,
            formatted_address=result.formatted_address,
        )
