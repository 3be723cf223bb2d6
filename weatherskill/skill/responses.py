"""
Response envelope returned to Alexa, and builders for the kinds of
responses the skill gives.
"""

from typing import Any, Literal

from ..forecasts.images import CardImage
from ..integrations.alexa.client import ADDRESS_PERMISSION
from .types import AlexaModel


class OutputSpeech(AlexaModel):
    type: Literal["SSML", "PlainText"]
    ssml: str | None = None
    text: str | None = None


class Image(AlexaModel):
    small_image_url: str
    large_image_url: str


class Card(AlexaModel):
    type: Literal["Simple", "Standard", "AskForPermissionsConsent"]
    title: str | None = None
    content: str | None = None
    text: str | None = None
    image: Image | None = None
    permissions: list[str] | None = None


class Reprompt(AlexaModel):
    output_speech: OutputSpeech


class ResponseBody(AlexaModel):
    output_speech: OutputSpeech | None = None
    card: Card | None = None
    reprompt: Reprompt | None = None
    should_end_session: bool | None = None


class ResponseEnvelope(AlexaModel):
    version: str = "1.0"
    session_attributes: dict[str, Any] | None = None
    response: ResponseBody

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def ssml(speech: str) -> OutputSpeech:
    """Wrap speech in a <speak> tag unless it already is."""
    if not speech.startswith("<speak>"):
        speech = f"<speak>{speech}</speak>"
    return OutputSpeech(type="SSML", ssml=speech)


def tell(speech: str) -> ResponseEnvelope:
    """Say something and end the session."""
    return ResponseEnvelope(
        response=ResponseBody(output_speech=ssml(speech), should_end_session=True)
    )


def ask(speech: str, reprompt: str | None = None) -> ResponseEnvelope:
    """
    Say something and keep the session open for an answer. If no reprompt is
    given, the question is repeated.
    """
    return ResponseEnvelope(
        response=ResponseBody(
            output_speech=ssml(speech),
            reprompt=Reprompt(output_speech=ssml(reprompt or speech)),
            should_end_session=False,
        )
    )


def tell_with_card(
    speech: str, *, title: str, content: str, image: CardImage | None = None
) -> ResponseEnvelope:
    """
    Say something, show a card in the Alexa app and end the session. Cards
    with an image are standard cards, the rest are simple cards.
    """
    if image:
        card = Card(
            type="Standard",
            title=title,
            text=content,
            image=Image(
                small_image_url=image.small_image_url,
                large_image_url=image.large_image_url,
            ),
        )
    else:
        card = Card(type="Simple", title=title, content=content)

    return ResponseEnvelope(
        response=ResponseBody(
            output_speech=ssml(speech), card=card, should_end_session=True
        )
    )


def ask_for_permissions(speech: str) -> ResponseEnvelope:
    """
    Say something and show a card asking the user to grant access to the
    device address.
    """
    return ResponseEnvelope(
        response=ResponseBody(
            output_speech=ssml(speech),
            card=Card(
                type="AskForPermissionsConsent", permissions=[ADDRESS_PERMISSION]
            ),
            should_end_session=True,
        )
    )


def end_session() -> ResponseEnvelope:
    return ResponseEnvelope(response=ResponseBody(should_end_session=True))
