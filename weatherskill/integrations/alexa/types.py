from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DeviceAddress(BaseModel):
    """Address registered for an Echo device in the Alexa app."""

    address_line1: str | None = None
    address_line2: str | None = None
    address_line3: str | None = None
    city: str | None = None
    district_or_county: str | None = None
    state_or_region: str | None = None
    country_code: str | None = None
    postal_code: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_location_string(self) -> str:
        """
        Render the address as a single line suitable for geocoding, skipping
        any empty parts.
        """
        parts = [
            self.address_line1,
            self.address_line2,
            self.address_line3,
            self.city,
            self.state_or_region,
            self.country_code,
            self.postal_code,
        ]
        return ", ".join(part for part in parts if part)
