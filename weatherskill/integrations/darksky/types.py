from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DarkSkyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DataPoint(DarkSkyModel):
    """Weather conditions at a point in time."""

    time: int | None = None
    summary: str | None = None
    icon: str | None = None
    temperature: float | None = None
    apparent_temperature: float | None = None
    humidity: float | None = None
    dew_point: float | None = None
    pressure: float | None = None
    wind_speed: float | None = None
    wind_bearing: float | None = None
    precip_probability: float | None = None
    precip_intensity: float | None = None
    nearest_storm_distance: float | None = None
    nearest_storm_bearing: float | None = None

    # Daily data points only
    temperature_high: float | None = None
    temperature_low: float | None = None


class DataBlock(DarkSkyModel):
    """Weather conditions over a period of time."""

    summary: str | None = None
    icon: str | None = None
    data: list[DataPoint] = []


class Flags(BaseModel):
    units: str | None = None


class Forecast(DarkSkyModel):
    """Response from the Dark Sky forecast endpoint."""

    latitude: float
    longitude: float
    timezone: str | None = None
    currently: DataPoint | None = None
    minutely: DataBlock | None = None
    hourly: DataBlock | None = None
    daily: DataBlock | None = None
    flags: Flags | None = None

    @property
    def is_empty(self) -> bool:
        return self.currently is None and self.minutely is None and self.hourly is None
