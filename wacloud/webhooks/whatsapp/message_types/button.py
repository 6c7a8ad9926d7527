"""WhatsApp quick-reply button message schema."""

from wacloud.webhooks.whatsapp.base_models import WireModel


class Button(WireModel):
    """Tap on a quick-reply button of a template message."""

    payload: str = ""
    text: str = ""
