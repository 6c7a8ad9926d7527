"""
WhatsApp message status schema.

Status updates report the delivery state of messages the business sent:
sent, delivered, read or failed.
"""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import (
    Conversation,
    ErrorRecord,
    Pricing,
    WireModel,
)


class WhatsAppMessageStatus(WireModel):
    """Delivery status of one outbound message."""

    id: str = Field(default="", description="WhatsApp message ID this status refers to")
    status: str = Field(default="", description="sent, delivered, read or failed")
    timestamp: str = ""
    recipient_id: str = ""
    conversation: Conversation | None = None
    pricing: Pricing | None = None
    errors: list[ErrorRecord] = Field(default_factory=list)
    biz_opaque_callback_data: str = ""

    @property
    def is_failed(self) -> bool:
        return self.status.lower() == "failed"
