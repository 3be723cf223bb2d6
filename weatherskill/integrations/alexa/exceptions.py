from ..common.exceptions import IntegrationAPIError


class AlexaAPIError(IntegrationAPIError):
    """Alexa-specific API error."""

    pass


class PermissionDenied(AlexaAPIError):
    """The consent token is missing, has been revoked or has expired."""

    pass


class AddressNotSet(AlexaAPIError):
    """The device has no address registered."""

    pass
