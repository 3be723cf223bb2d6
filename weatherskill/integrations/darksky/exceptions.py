from ..common.exceptions import IntegrationAPIError


class DarkSkyAPIError(IntegrationAPIError):
    """Dark Sky API error."""

    pass


class ForecastUnavailable(DarkSkyAPIError):
    """The API returned no usable forecast for the coordinate."""

    pass
