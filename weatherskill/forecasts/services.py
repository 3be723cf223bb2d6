from dataclasses import dataclass

import httpx
import structlog

from ..integrations.alexa.client import DEFAULT_API_ENDPOINT, AlexaClient
from ..integrations.alexa.exceptions import AddressNotSet, PermissionDenied
from ..integrations.common import IntegrationAPIError
from ..integrations.darksky.client import DarkSkyClient
from ..integrations.darksky.exceptions import ForecastUnavailable
from ..integrations.darksky.types import Forecast
from ..integrations.geocoding.client import GeocodingClient
from ..integrations.geocoding.exceptions import LocationNotFound
from ..integrations.geocoding.types import GeocodedLocation
from .exceptions import (
    DeviceAddressMissing,
    ForecastServiceError,
    LocationNotUnderstood,
    NoForecastAvailable,
    PermissionRequired,
)

logger = structlog.get_logger()

# Failures talking to any of the external APIs
SERVICE_ERRORS = (IntegrationAPIError, httpx.HTTPError)


@dataclass(frozen=True, kw_only=True)
class ForecastReport:
    location: GeocodedLocation
    forecast: Forecast


async def resolve_location(
    *,
    spoken: str | None,
    device_id: str | None,
    consent_token: str | None,
    alexa: AlexaClient,
    api_endpoint: str = DEFAULT_API_ENDPOINT,
) -> str:
    """
    Figure out which location the user wants the forecast for.

    A location given in the request is always preferred. Otherwise we use the
    address registered for the device, which requires the user to have granted
    the skill access to it.
    """

    if spoken:
        return spoken

    if not consent_token or not device_id:
        raise PermissionRequired()

    try:
        address = await alexa.get_device_address(
            device_id=device_id,
            consent_token=consent_token,
            api_endpoint=api_endpoint,
        )
    except PermissionDenied as e:
        raise PermissionRequired() from e
    except AddressNotSet as e:
        raise DeviceAddressMissing() from e
    except SERVICE_ERRORS as e:
        raise ForecastServiceError() from e

    return address.to_location_string()


async def get_forecast_report(
    location: str, *, geocoder: GeocodingClient, darksky: DarkSkyClient
) -> ForecastReport:
    """
    Geocode the location and load the forecast for it.
    """

    try:
        geocoded = await geocoder.geocode(address=location)
    except LocationNotFound as e:
        raise LocationNotUnderstood() from e
    except SERVICE_ERRORS as e:
        raise ForecastServiceError() from e

    logger.info(
        "Location geocoded",
        location=location,
        formatted_address=geocoded.formatted_address,
    )

    try:
        forecast = await darksky.get_forecast(
            latitude=geocoded.latitude, longitude=geocoded.longitude
        )
    except ForecastUnavailable as e:
        raise NoForecastAvailable() from e
    except SERVICE_ERRORS as e:
        raise ForecastServiceError() from e

    return ForecastReport(location=geocoded, forecast=forecast)
