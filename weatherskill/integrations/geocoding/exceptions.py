from ..common.exceptions import IntegrationAPIError


class GeocodingAPIError(IntegrationAPIError):
    """Geocoding API error."""

    pass


class LocationNotFound(GeocodingAPIError):
    """The geocoder could not resolve the address to a location."""

    def __init__(self, address: str, status: str) -> None:
        super().__init__(f"Unable to geocode {address!r}: {status}")
        self.address = address
        self.status = status
