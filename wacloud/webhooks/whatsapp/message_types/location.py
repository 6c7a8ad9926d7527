"""WhatsApp location message schema."""

from wacloud.webhooks.whatsapp.base_models import WireModel


class Location(WireModel):
    """Location shared by the customer, either a pin or a named place."""

    latitude: float = 0.0
    longitude: float = 0.0
    name: str = ""
    address: str = ""
    url: str = ""
