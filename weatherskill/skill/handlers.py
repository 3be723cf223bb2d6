"""
Request handlers for the skill.

Handlers are registered by the intent name or request type they answer with
the @handler decorator, and requests are routed to them with dispatch().
Requests nothing is registered for are answered by the fallback handler.
"""

import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeAlias

import structlog

from ..consent.store import ConsentTokenStore
from ..forecasts.exceptions import ForecastError, PermissionRequired
from ..forecasts.images import forecast_image
from ..forecasts.render import forecast_plain, forecast_ssml
from ..forecasts.services import get_forecast_report, resolve_location
from ..integrations.alexa.client import AlexaClient
from ..integrations.common import MissingConfiguration
from ..integrations.darksky.client import DarkSkyClient
from ..integrations.geocoding.client import GeocodingClient
from .exceptions import InvalidApplicationId
from .responses import (
    ResponseEnvelope,
    ask,
    ask_for_permissions,
    end_session,
    tell,
    tell_with_card,
)
from .types import RequestEnvelope

logger = structlog.get_logger()

CARD_TITLE = "Weather Forecast"

HELP_TEXT = (
    "To get the forecast for your current location, ask 'how's the weather'. "
    "You can also specify a location, like 'how's the weather in new york'"
)

UNHANDLED = "Unhandled"


@dataclass(frozen=True, kw_only=True)
class HandlerInput:
    envelope: RequestEnvelope
    store: ConsentTokenStore


Handler: TypeAlias = Callable[[HandlerInput], Awaitable[ResponseEnvelope]]

_HANDLERS: dict[str, Handler] = {}


def handler(*names: str) -> Callable[[Handler], Handler]:
    """
    Decorator for registering the handler for one or more intents or
    request types.
    """

    def _inner(func: Handler) -> Handler:
        for name in names:
            assert name not in _HANDLERS, f"Duplicate handler for {name}"
            _HANDLERS[name] = func
        return func

    return _inner


def get_handler(name: str) -> Handler:
    return _HANDLERS.get(name) or _HANDLERS[UNHANDLED]


def verify_application_id(envelope: RequestEnvelope) -> None:
    """
    Reject requests for other skills if ALEXA_APP_ID is set.
    """

    expected = os.getenv("ALEXA_APP_ID")
    if expected and envelope.application_id != expected:
        raise InvalidApplicationId(
            f"Request for unexpected application {envelope.application_id}"
        )


async def dispatch(
    envelope: RequestEnvelope, *, store: ConsentTokenStore
) -> ResponseEnvelope:
    """
    Route a request to its handler and return the response.
    """

    verify_application_id(envelope)

    log = logger.bind(request_id=envelope.request.request_id, name=envelope.name)
    log.info("Handling request")

    response = await get_handler(envelope.name)(
        HandlerInput(envelope=envelope, store=store)
    )
    response.session_attributes = envelope.session_attributes
    return response


############
# Handlers #
############


@handler("LaunchRequest")
async def launch(handler_input: HandlerInput) -> ResponseEnvelope:
    """
    The skill was opened without a question, e.g. "Alexa, open Dark Sky".
    """

    await _remember_consent_token(handler_input)
    return ask("What do you want to know?", "I'm sorry, could you say that again?")


@handler("LocationForecastIntent")
async def location_forecast(handler_input: HandlerInput) -> ResponseEnvelope:
    """
    A forecast for a city ("what's the weather in DC") or an address
    ("what's the weather at 1600 pennsylvania avenue"). Falls back to the
    device address if neither was understood.
    """

    envelope = handler_input.envelope
    spoken = envelope.slot_value("city") or envelope.slot_value("address")
    return await _forecast(handler_input, spoken=spoken)


@handler("EchoForecastIntent")
async def echo_forecast(handler_input: HandlerInput) -> ResponseEnvelope:
    """
    A forecast without a location ("what's the weather"), given for the
    address registered for the device.
    """

    return await _forecast(handler_input, spoken=None)


@handler("AMAZON.StopIntent", "AMAZON.CancelIntent")
async def stop(handler_input: HandlerInput) -> ResponseEnvelope:
    return tell("Okay")


@handler("AMAZON.HelpIntent")
async def help_intent(handler_input: HandlerInput) -> ResponseEnvelope:
    return ask(HELP_TEXT)


@handler("SessionEndedRequest")
async def session_ended(handler_input: HandlerInput) -> ResponseEnvelope:
    logger.info("Session ended", reason=handler_input.envelope.request.reason)
    return end_session()


@handler(UNHANDLED)
async def unhandled(handler_input: HandlerInput) -> ResponseEnvelope:
    return ask(f"I didn't get that. {HELP_TEXT}")


###########
# Helpers #
###########


async def _remember_consent_token(handler_input: HandlerInput) -> str | None:
    """
    Store the consent token from the request, or look up the stored one if
    the request doesn't have one.
    """

    envelope = handler_input.envelope
    user_id = envelope.user_id
    consent_token = envelope.consent_token

    if not user_id:
        return consent_token

    if consent_token:
        await handler_input.store.put(user_id, consent_token)
        return consent_token

    return await handler_input.store.get(user_id)


async def _forecast(
    handler_input: HandlerInput, *, spoken: str | None
) -> ResponseEnvelope:
    envelope = handler_input.envelope
    consent_token = await _remember_consent_token(handler_input)

    try:
        async with (
            AlexaClient() as alexa,
            GeocodingClient() as geocoder,
            DarkSkyClient() as darksky,
        ):
            location = await resolve_location(
                spoken=spoken,
                device_id=envelope.device_id,
                consent_token=consent_token,
                alexa=alexa,
                api_endpoint=envelope.api_endpoint,
            )
            report = await get_forecast_report(
                location, geocoder=geocoder, darksky=darksky
            )
        image = forecast_image(report.forecast)
    except PermissionRequired as e:
        logger.info("Device address permission required")
        return ask_for_permissions(e.speech)
    except ForecastError as e:
        logger.warning(
            "Unable to give forecast",
            error=type(e).__name__,
            cause=repr(e.__cause__),
        )
        return tell(e.speech)
    except MissingConfiguration as e:
        logger.error("Skill is not configured", variable=e.key)
        return tell(ForecastError.speech)

    address = report.location.formatted_address
    return tell_with_card(
        forecast_ssml(report.forecast, address=address),
        title=CARD_TITLE,
        content=forecast_plain(report.forecast, address=address),
        image=image,
    )
