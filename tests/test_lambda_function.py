from collections.abc import Callable
from typing import Any

from pytest_mock import MockerFixture

from weatherskill.integrations.darksky.client import DarkSkyClient
from weatherskill.integrations.darksky.types import Forecast
from weatherskill.integrations.geocoding.client import GeocodingClient
from weatherskill.integrations.geocoding.types import GeocodedLocation
from weatherskill.skill.lambda_function import handler


def test_launch(build_event: Callable[..., dict[str, Any]]) -> None:
    result = handler(build_event("LaunchRequest"), None)

    assert result["version"] == "1.0"
    assert result["response"]["shouldEndSession"] is False


def test_forecast(
    build_event: Callable[..., dict[str, Any]],
    forecast_data: dict[str, Any],
    mocker: MockerFixture,
) -> None:
    geocode = mocker.patch.object(
        GeocodingClient,
        "geocode",
        return_value=GeocodedLocation(
            latitude=40.7127753,
            longitude=-74.0059728,
            formatted_address="New York, NY, USA",
        ),
    )
    mocker.patch.object(
        DarkSkyClient,
        "get_forecast",
        return_value=Forecast.model_validate(forecast_data),
    )

    result = handler(
        build_event("LocationForecastIntent", slots={"city": "new york"}), None
    )

    geocode.assert_awaited_once_with(address="new york")
    response = result["response"]
    assert "New York, NY, USA" in response["outputSpeech"]["ssml"]
    assert response["card"]["title"] == "Weather Forecast"
    assert response["shouldEndSession"] is True
