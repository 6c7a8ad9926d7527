"""
Inbound WhatsApp message record.

A message carries a ``type`` tag and the payload slot that tag selects. Every
slot is optional so unknown or newly introduced types still decode; the
classifier decides which payload a handler receives.
"""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import (
    ErrorRecord,
    MessageContext,
    Referral,
    WireModel,
)
from wacloud.webhooks.whatsapp.message_types import (
    Button,
    ContactCard,
    Identity,
    Interactive,
    Location,
    MediaInfo,
    Order,
    Reaction,
    System,
    TextContent,
)


class WhatsAppMessage(WireModel):
    """One message sent by a customer to the business."""

    from_: str = Field(default="", alias="from", description="Sender wa_id")
    id: str = Field(default="", description="WhatsApp message ID (wamid)")
    timestamp: str = Field(default="", description="Unix timestamp, as sent")
    type: str = Field(default="", description="Message type tag")

    context: MessageContext | None = None
    errors: list[ErrorRecord] = Field(default_factory=list)
    referral: Referral | None = None
    identity: Identity | None = None

    text: TextContent | None = None
    image: MediaInfo | None = None
    audio: MediaInfo | None = None
    video: MediaInfo | None = None
    document: MediaInfo | None = None
    sticker: MediaInfo | None = None
    location: Location | None = None
    contacts: list[ContactCard] = Field(default_factory=list)
    reaction: Reaction | None = None
    order: Order | None = None
    button: Button | None = None
    system: System | None = None
    interactive: Interactive | None = None

    @property
    def sender(self) -> str:
        return self.from_

    @property
    def is_forwarded(self) -> bool:
        """True when the customer forwarded this message."""
        if self.context is None:
            return False
        return self.context.forwarded or self.context.frequently_forwarded

    @property
    def is_product_enquiry(self) -> bool:
        """True when the text was sent from a catalog product."""
        return self.context is not None and self.context.referred_product is not None

    @property
    def is_reply(self) -> bool:
        """
        True when the message quotes an earlier message.

        Forwards and product enquiries also carry a context object but are
        not replies.
        """
        return (
            self.context is not None
            and not self.is_product_enquiry
            and not self.is_forwarded
        )

    @property
    def is_referral(self) -> bool:
        """True when the customer arrived from a Click-to-WhatsApp ad."""
        return self.referral is not None
