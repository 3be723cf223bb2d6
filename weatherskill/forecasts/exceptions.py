class ForecastError(Exception):
    """
    Base class for errors that stop a forecast from being given. Every error
    has a message that can be spoken back to the user.
    """

    speech = "Sorry, I wasn't able to get the forecast right now."


class PermissionRequired(ForecastError):
    speech = (
        "To get the forecast for your current location, please allow access "
        "to your device address in the Alexa app. You can also ask for the "
        "weather in a specific city."
    )


class DeviceAddressMissing(ForecastError):
    speech = (
        "Your device doesn't have an address set. You can add one in the Alexa "
        "app, or ask for the weather in a specific city."
    )


class LocationNotUnderstood(ForecastError):
    speech = "Sorry, I couldn't find that location. Could you try another one?"


class NoForecastAvailable(ForecastError):
    speech = "Sorry, there's no forecast available for that location."


class ForecastServiceError(ForecastError):
    pass
