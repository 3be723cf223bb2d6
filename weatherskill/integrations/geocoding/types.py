from dataclasses import dataclass

import pydantic


class LatLng(pydantic.BaseModel):
    lat: float
    lng: float


class Geometry(pydantic.BaseModel):
    location: LatLng


class GeocodingResult(pydantic.BaseModel):
    formatted_address: str
    geometry: Geometry


class GeocodingResponse(pydantic.BaseModel):
    """Response from the Google Maps geocoding endpoint."""

    status: str
    results: list[GeocodingResult] = []
    error_message: str | None = None


@dataclass(frozen=True, kw_only=True)
class GeocodedLocation:
    latitude: float
    longitude: float
    formatted_address: str
