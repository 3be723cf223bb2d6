from dataclasses import dataclass

from imgix import UrlBuilder

from ..integrations.common import getenv
from ..integrations.darksky.types import Forecast

# Icons we have images for in the S3 bucket
KNOWN_ICONS = frozenset(
    {
        "clear-day",
        "clear-night",
        "rain",
        "sleet",
        "hail",
        "snow",
        "wind",
        "fog",
        "cloudy",
        "partly-cloudy-day",
        "partly-cloudy-night",
        "thunderstorm",
        "tornado",
    }
)

SMALL_IMAGE_WIDTH = 720
LARGE_IMAGE_WIDTH = 1200


@dataclass(frozen=True, kw_only=True)
class CardImage:
    small_image_url: str
    large_image_url: str


def get_url_builder() -> UrlBuilder:
    return UrlBuilder(
        getenv("IMGIX_DOMAIN"),
        sign_key=getenv("IMGIX_TOKEN"),
        include_library_param=False,
    )


def forecast_image(forecast: Forecast) -> CardImage | None:
    """
    Card image for the current conditions, resized through imgix. Returns
    None if there is no image for the current icon.
    """
    if not forecast.currently or forecast.currently.icon not in KNOWN_ICONS:
        return None

    source_url = (
        f"https://s3.amazonaws.com/{getenv('S3_BUCKET')}"
        f"/images/{forecast.currently.icon}.png"
    )
    builder = get_url_builder()

    return CardImage(
        small_image_url=builder.create_url(source_url, {"w": SMALL_IMAGE_WIDTH}),
        large_image_url=builder.create_url(source_url, {"w": LARGE_IMAGE_WIDTH}),
    )
