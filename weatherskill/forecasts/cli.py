import click

from ..integrations.darksky.client import DarkSkyClient
from ..integrations.geocoding.client import GeocodingClient
from .exceptions import ForecastError
from .render import forecast_plain, forecast_ssml
from .services import get_forecast_report


@click.command(name="forecast", help="Print the forecast for a location")
@click.argument("location")
@click.option("--ssml", is_flag=True, help="Print the spoken SSML rendering")
async def cli(*, location: str, ssml: bool) -> None:
    try:
        async with GeocodingClient() as geocoder, DarkSkyClient() as darksky:
            report = await get_forecast_report(
                location, geocoder=geocoder, darksky=darksky
            )
    except ForecastError as e:
        click.echo(f"Error: {e.speech}", err=True)
        raise SystemExit(1)

    address = report.location.formatted_address
    if ssml:
        click.echo(forecast_ssml(report.forecast, address=address))
    else:
        click.echo(forecast_plain(report.forecast, address=address))
