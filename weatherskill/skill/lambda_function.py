"""
AWS Lambda entry point for the skill. Configure the function handler as
weatherskill.skill.lambda_function.handler.
"""

import asyncio
from typing import Any

from ..consent.store import open_consent_store
from ..utils import configure_logging
from .handlers import dispatch
from .types import RequestEnvelope

configure_logging()


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    envelope = RequestEnvelope.model_validate(event)
    return asyncio.run(handle(envelope))


async def handle(envelope: RequestEnvelope) -> dict[str, Any]:
    async with open_consent_store() as store:
        response = await dispatch(envelope, store=store)

    return response.to_dict()
