import os

import httpx
import structlog

from ...utils import timed
from ..common import BaseAPIClient, getenv
from .exceptions import DarkSkyAPIError, ForecastUnavailable
from .types import Forecast

logger = structlog.get_logger()

API_URL = "https://api.darksky.net/forecast"


class DarkSkyClient(BaseAPIClient):
    """
    A client for the Dark Sky forecast API.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        units: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(transport=transport)
        self.api_key = api_key or getenv("DARKSKY_API_KEY")
        self.units = units or os.getenv("DARKSKY_UNITS", "us")

    async def get_forecast(self, *, latitude: float, longitude: float) -> Forecast:
        """
        Load the forecast for a coordinate.

        Raises ForecastUnavailable if the response has neither current
        conditions, a minute-by-minute nor an hour-by-hour forecast.
        """
        client = self._get_client()

        with timed("Fetch forecast", latitude=latitude, longitude=longitude):
            response = await client.get(
                f"{API_URL}/{self.api_key}/{latitude},{longitude}",
                params={"units": self.units},
            )

        if response.status_code >= 400:
            logger.error(
                "Forecast request failed",
                status_code=response.status_code,
                body=response.text,
            )
            raise DarkSkyAPIError(
                f"Forecast request failed with status {response.status_code}"
            )

        forecast = self._decode_json(response, Forecast)
        if forecast.is_empty:
            raise ForecastUnavailable(
                f"No forecast available for {latitude},{longitude}"
            )

        return forecast
