from typing import Any

import httpx
import pytest

from weatherskill.forecasts.exceptions import (
    DeviceAddressMissing,
    ForecastServiceError,
    LocationNotUnderstood,
    NoForecastAvailable,
    PermissionRequired,
)
from weatherskill.forecasts.services import get_forecast_report, resolve_location
from weatherskill.integrations.alexa.client import AlexaClient
from weatherskill.integrations.darksky.client import DarkSkyClient
from weatherskill.integrations.geocoding.client import GeocodingClient

pytestmark = pytest.mark.asyncio


def json_transport(
    status_code: int, data: Any, requests: list[httpx.Request] | None = None
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, json=data)

    return httpx.MockTransport(handler)


#####################
# resolve_location #
#####################


async def test_spoken_location_is_preferred(device_id: str) -> None:
    requests: list[httpx.Request] = []
    alexa = AlexaClient(transport=json_transport(200, {}, requests))

    location = await resolve_location(
        spoken="new york",
        device_id=device_id,
        consent_token="token",
        alexa=alexa,
    )

    assert location == "new york"
    assert requests == []


async def test_device_address(device_id: str) -> None:
    address = {
        "addressLine1": "1600 Pennsylvania Ave NW",
        "addressLine2": None,
        "city": "Washington",
        "stateOrRegion": "DC",
        "countryCode": "US",
        "postalCode": "20500",
    }

    async with AlexaClient(transport=json_transport(200, address)) as alexa:
        location = await resolve_location(
            spoken=None, device_id=device_id, consent_token="token", alexa=alexa
        )

    assert location == "1600 Pennsylvania Ave NW, Washington, DC, US, 20500"


async def test_device_address_without_consent_token(device_id: str) -> None:
    requests: list[httpx.Request] = []
    alexa = AlexaClient(transport=json_transport(200, {}, requests))

    with pytest.raises(PermissionRequired):
        await resolve_location(
            spoken=None, device_id=device_id, consent_token=None, alexa=alexa
        )

    assert requests == []


@pytest.mark.parametrize(
    "status_code,exception",
    [
        (403, PermissionRequired),
        (204, DeviceAddressMissing),
        (500, ForecastServiceError),
    ],
)
async def test_device_address_errors(
    device_id: str, status_code: int, exception: type[Exception]
) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code))

    async with AlexaClient(transport=transport) as alexa:
        with pytest.raises(exception):
            await resolve_location(
                spoken=None, device_id=device_id, consent_token="token", alexa=alexa
            )


########################
# get_forecast_report #
########################


async def test_get_forecast_report(
    geocoding_data: dict[str, Any], forecast_data: dict[str, Any]
) -> None:
    forecast_requests: list[httpx.Request] = []

    async with (
        GeocodingClient(transport=json_transport(200, geocoding_data)) as geocoder,
        DarkSkyClient(
            transport=json_transport(200, forecast_data, forecast_requests)
        ) as darksky,
    ):
        report = await get_forecast_report(
            "washington dc", geocoder=geocoder, darksky=darksky
        )

    assert report.location.formatted_address == "Washington, DC, USA"
    assert report.forecast.currently is not None

    (request,) = forecast_requests
    assert request.url.path.endswith("/38.9071923,-77.0368707")


async def test_geocoding_failure_skips_forecast(
    forecast_data: dict[str, Any],
) -> None:
    forecast_requests: list[httpx.Request] = []

    async with (
        GeocodingClient(
            transport=json_transport(200, {"status": "ZERO_RESULTS", "results": []})
        ) as geocoder,
        DarkSkyClient(
            transport=json_transport(200, forecast_data, forecast_requests)
        ) as darksky,
    ):
        with pytest.raises(LocationNotUnderstood):
            await get_forecast_report("atlantis", geocoder=geocoder, darksky=darksky)

    assert forecast_requests == []


async def test_empty_forecast(geocoding_data: dict[str, Any]) -> None:
    async with (
        GeocodingClient(transport=json_transport(200, geocoding_data)) as geocoder,
        DarkSkyClient(
            transport=json_transport(200, {"latitude": 0, "longitude": 0})
        ) as darksky,
    ):
        with pytest.raises(NoForecastAvailable):
            await get_forecast_report("oslo", geocoder=geocoder, darksky=darksky)


async def test_network_error(geocoding_data: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("Timed out", request=request)

    async with (
        GeocodingClient(transport=json_transport(200, geocoding_data)) as geocoder,
        DarkSkyClient(transport=httpx.MockTransport(handler)) as darksky,
    ):
        with pytest.raises(ForecastServiceError):
            await get_forecast_report("oslo", geocoder=geocoder, darksky=darksky)
