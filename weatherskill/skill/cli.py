import json
from typing import IO

import click

from ..consent.store import open_consent_store
from .handlers import dispatch
from .types import RequestEnvelope


@click.group(name="skill", help="Run the skill locally")
def cli() -> None:
    pass


@cli.command(help="Handle a request envelope read from a JSON file")
@click.argument("event_file", type=click.File("r"))
async def invoke(*, event_file: IO[str]) -> None:
    envelope = RequestEnvelope.model_validate_json(event_file.read())

    async with open_consent_store() as store:
        response = await dispatch(envelope, store=store)

    click.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
