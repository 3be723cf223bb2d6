import structlog

from ...utils import timed
from ..common import BaseAPIClient
from .exceptions import AddressNotSet, AlexaAPIError, PermissionDenied
from .types import DeviceAddress

logger = structlog.get_logger()

DEFAULT_API_ENDPOINT = "https://api.amazonalexa.com"

# Permission the skill has to request to read the full device address
ADDRESS_PERMISSION = "read::alexa:device:all:address"


class AlexaClient(BaseAPIClient):
    """
    A client for the Alexa device settings API.
    """

    async def get_device_address(
        self,
        *,
        device_id: str,
        consent_token: str,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
    ) -> DeviceAddress:
        """
        Get the address the user has registered for the given device.

        Raises PermissionDenied if the consent token is not accepted, and
        AddressNotSet if the device has no address.
        """
        client = self._get_client()

        with timed("Fetch device address", device_id=device_id):
            response = await client.get(
                f"{api_endpoint.rstrip('/')}/v1/devices/{device_id}/settings/address",
                headers={"Authorization": f"Bearer {consent_token}"},
            )

        if response.status_code == 403:
            raise PermissionDenied("Not allowed to read the device address")

        if response.status_code == 204:
            raise AddressNotSet(f"No address set for device {device_id}")

        if response.status_code >= 400:
            logger.error(
                "Device address request failed",
                status_code=response.status_code,
                body=response.text,
            )
            raise AlexaAPIError(
                f"Device address request failed with status {response.status_code}"
            )

        address = self._decode_json(response, DeviceAddress)
        if not address.to_location_string():
            raise AddressNotSet(f"Empty address set for device {device_id}")

        return address
