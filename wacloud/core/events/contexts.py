"""
Read-only contexts handed to handlers.

``DispatchContext`` is created once per request by the caller and forwarded
unchanged to every handler. The other contexts are derived from the decoded
notification: one per change, one per message.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.whatsapp.base_models import Contact, MessageContext, Metadata
from wacloud.webhooks.whatsapp.message import WhatsAppMessage
from wacloud.webhooks.whatsapp.webhook_container import Change, Entry, Notification


class DispatchContext(BaseModel):
    """
    Request scoped data shared by every handler of one dispatch call.

    ``values`` is free-form storage for the embedding application, such as
    a database session or the raw request.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    values: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class NotificationContext(BaseModel):
    """Business account, phone and contacts of the change being dispatched."""

    model_config = ConfigDict(frozen=True)

    object: str = ""
    entry_id: str = ""
    entry_time: int = 0
    change_field: str = ""
    messaging_product: str = ""
    contacts: tuple[Contact, ...] = ()
    metadata: Metadata = Field(default_factory=Metadata)

    @classmethod
    def from_change(
        cls, notification: Notification, entry: Entry, change: Change
    ) -> "NotificationContext":
        value = change.value
        return cls(
            object=notification.object,
            entry_id=entry.id,
            entry_time=entry.time,
            change_field=change.field,
            messaging_product=value.messaging_product,
            contacts=tuple(value.contacts),
            metadata=value.metadata,
        )

    @property
    def sender(self) -> Contact | None:
        """First contact of the change, the customer who wrote."""
        return self.contacts[0] if self.contacts else None

    @property
    def phone_number_id(self) -> str:
        return self.metadata.phone_number_id


class BusinessNotificationContext(BaseModel):
    """Context of a business account change (templates, quality, account events)."""

    model_config = ConfigDict(frozen=True)

    object: str = ""
    entry_id: str = ""
    entry_time: int = 0
    change_field: str = ""

    @classmethod
    def from_change(
        cls, notification: Notification, entry: Entry, change: Change
    ) -> "BusinessNotificationContext":
        return cls(
            object=notification.object,
            entry_id=entry.id,
            entry_time=entry.time,
            change_field=change.field,
        )


class MessageInfo(BaseModel):
    """Per-message facts shared by every message variant."""

    model_config = ConfigDict(frozen=True)

    sender: str = ""
    message_id: str = ""
    timestamp: str = ""
    type: str = ""
    context: MessageContext | None = None
    is_reply: bool = False
    is_forwarded: bool = False
    is_product_enquiry: bool = False
    is_referral: bool = False

    @classmethod
    def from_message(cls, message: WhatsAppMessage) -> "MessageInfo":
        return cls(
            sender=message.sender,
            message_id=message.id,
            timestamp=message.timestamp,
            type=message.type,
            context=message.context,
            is_reply=message.is_reply,
            is_forwarded=message.is_forwarded,
            is_product_enquiry=message.is_product_enquiry,
            is_referral=message.is_referral,
        )

    @property
    def sent_at(self) -> datetime | None:
        """Timestamp as an aware datetime, None when absent or not numeric."""
        if not self.timestamp.isdigit():
            return None
        return datetime.fromtimestamp(int(self.timestamp), tz=timezone.utc)
