"""
Render Dark Sky forecasts as speech (SSML) and as plain text for cards.

Both renderings contain the same sections, in a fixed order:

- Current conditions, including the nearest storm when one is reported
- Next hour
- Next 24 hours, with the high and low apparent temperature
- Next 7 days

Sections missing from the forecast are left out.
"""

import math
from xml.sax.saxutils import escape

from ..integrations.darksky.types import DataBlock, DataPoint, Forecast

COMPASS_DIRECTIONS = [
    "North",
    "Northeast",
    "East",
    "Southeast",
    "South",
    "Southwest",
    "West",
    "Northwest",
]

# Number of hourly data points the high and low are calculated from
HOURS_IN_DAY = 24

# Unit systems where Dark Sky reports distances in kilometers
METRIC_DISTANCE_UNITS = {"si", "ca"}


def round_half_up(value: float) -> int:
    """
    Round to the nearest whole number, with halves rounded up. Unlike the
    builtin round() this never rounds half to even, so 2.5 becomes 3.
    """
    return math.floor(value + 0.5)


def humidity_percent(humidity: float) -> int:
    """Convert a 0-1 humidity fraction to a whole percentage."""
    return round_half_up(humidity * 100)


def compass_direction(bearing: float) -> str:
    """Convert a bearing in degrees to one of the eight compass directions."""
    return COMPASS_DIRECTIONS[round_half_up(bearing / 45) % 8]


def high_low(hourly: DataBlock) -> tuple[int, int] | None:
    """
    The highest and lowest apparent temperature over the next 24 hours.
    """
    temperatures = [
        point.apparent_temperature
        for point in hourly.data[:HOURS_IN_DAY]
        if point.apparent_temperature is not None
    ]
    if not temperatures:
        return None

    return round_half_up(max(temperatures)), round_half_up(min(temperatures))


def format_high_low(hourly: DataBlock) -> str | None:
    if not (extremes := high_low(hourly)):
        return None

    high, low = extremes
    return f"{high}°/{low}°"


###################
# Section helpers #
###################


def describe_current(point: DataPoint) -> str | None:
    if point.temperature is None:
        return None

    temperature = round_half_up(point.temperature)
    if point.summary:
        text = f"Right now: {point.summary}, {temperature}°"
    else:
        text = f"Right now: {temperature}°"

    if point.apparent_temperature is not None:
        apparent = round_half_up(point.apparent_temperature)
        if apparent != temperature:
            text += f" but it feels like {apparent}°"

    details = []
    if point.humidity is not None:
        details.append(f"{humidity_percent(point.humidity)}% humidity")
    if point.dew_point is not None:
        details.append(f"a dew point of {round_half_up(point.dew_point)}°")
    if details:
        text += ", with " + ", and ".join(details)

    return text + "."


def describe_storm(point: DataPoint, *, units: str | None = None) -> str | None:
    distance = point.nearest_storm_distance
    if distance is None:
        return None

    distance = round_half_up(distance)
    if distance <= 0:
        return "There's a storm in your area."

    # The bearing is not reported when the storm is overhead
    if point.nearest_storm_bearing is None:
        return None

    unit = "kilometer" if units in METRIC_DISTANCE_UNITS else "mile"
    if distance != 1:
        unit += "s"

    direction = compass_direction(point.nearest_storm_bearing)
    return f"The nearest storm is {distance} {unit} to the {direction}."


def describe_next_hour(minutely: DataBlock) -> str | None:
    return f"Next hour: {minutely.summary}" if minutely.summary else None


def describe_next_24_hours(hourly: DataBlock, *, spoken: bool) -> str | None:
    if not hourly.summary:
        return None

    summary = hourly.summary.removesuffix(".")
    if not (extremes := high_low(hourly)):
        return f"Next 24 hours: {summary}."

    if spoken:
        high, low = extremes
        return (
            f"Next 24 hours: {summary}, "
            f"with a high of {high}° and a low of {low}°."
        )

    return f"Next 24 hours: {summary}, {format_high_low(hourly)}."


def describe_next_7_days(daily: DataBlock) -> str | None:
    return f"Next 7 days: {daily.summary}" if daily.summary else None


def _sections(forecast: Forecast, *, spoken: bool) -> list[str]:
    units = forecast.flags.units if forecast.flags else None

    sections: list[str | None] = []
    if forecast.currently:
        sections.append(describe_current(forecast.currently))
        sections.append(describe_storm(forecast.currently, units=units))
    if forecast.minutely:
        sections.append(describe_next_hour(forecast.minutely))
    if forecast.hourly:
        sections.append(describe_next_24_hours(forecast.hourly, spoken=spoken))
    if forecast.daily:
        sections.append(describe_next_7_days(forecast.daily))

    return [section for section in sections if section]


##############
# Renderings #
##############


def forecast_ssml(forecast: Forecast, *, address: str) -> str:
    """
    Render the forecast as SSML paragraphs, without the outer <speak> tag.
    """
    text = (
        "<p>Here's the forecast for "
        f'<say-as interpret-as="address">{escape(address)}</say-as></p>'
    )
    for section in _sections(forecast, spoken=True):
        text += f"<p>{escape(section)}</p>"

    return text


def forecast_plain(forecast: Forecast, *, address: str) -> str:
    """
    Render the forecast as plain text, one section per line.
    """
    lines = [f"Here's the forecast for {address}"]
    lines.extend(_sections(forecast, spoken=False))
    return "\n".join(lines)
