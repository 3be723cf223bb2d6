"""
Models for the request envelope Alexa sends to the skill. Only the parts
the skill uses are modelled; everything else is ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..integrations.alexa.client import DEFAULT_API_ENDPOINT


class AlexaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Application(AlexaModel):
    application_id: str


class Permissions(AlexaModel):
    consent_token: str | None = None


class User(AlexaModel):
    user_id: str
    permissions: Permissions | None = None


class Device(AlexaModel):
    device_id: str


class Session(AlexaModel):
    new: bool = False
    session_id: str
    application: Application
    attributes: dict[str, Any] | None = None
    user: User


class SystemState(AlexaModel):
    application: Application
    user: User
    device: Device | None = None
    api_endpoint: str | None = None
    api_access_token: str | None = None


class Context(AlexaModel):
    system: SystemState = Field(alias="System")


class Slot(AlexaModel):
    name: str
    value: str | None = None


class Intent(AlexaModel):
    name: str
    slots: dict[str, Slot] = Field(default_factory=dict)


class Request(AlexaModel):
    type: str
    request_id: str
    locale: str | None = None
    intent: Intent | None = None
    reason: str | None = None


class RequestEnvelope(AlexaModel):
    version: str = "1.0"
    session: Session | None = None
    context: Context | None = None
    request: Request

    @property
    def name(self) -> str:
        """
        The name used to route the request: the intent name for intent
        requests, the request type otherwise.
        """
        if self.request.type == "IntentRequest" and self.request.intent:
            return self.request.intent.name
        return self.request.type

    def slot_value(self, name: str) -> str | None:
        if not self.request.intent:
            return None

        slot = self.request.intent.slots.get(name)
        value = slot.value.strip() if slot and slot.value else None
        return value or None

    @property
    def application_id(self) -> str | None:
        if self.context:
            return self.context.system.application.application_id
        if self.session:
            return self.session.application.application_id
        return None

    @property
    def user_id(self) -> str | None:
        if self.context:
            return self.context.system.user.user_id
        if self.session:
            return self.session.user.user_id
        return None

    @property
    def device_id(self) -> str | None:
        if self.context and self.context.system.device:
            return self.context.system.device.device_id
        return None

    @property
    def consent_token(self) -> str | None:
        users = []
        if self.context:
            users.append(self.context.system.user)
        if self.session:
            users.append(self.session.user)

        for user in users:
            if user.permissions and user.permissions.consent_token:
                return user.permissions.consent_token
        return None

    @property
    def api_endpoint(self) -> str:
        if self.context and self.context.system.api_endpoint:
            return self.context.system.api_endpoint
        return DEFAULT_API_ENDPOINT

    @property
    def session_attributes(self) -> dict[str, Any]:
        return dict(self.session.attributes or {}) if self.session else {}
