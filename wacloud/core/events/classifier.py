"""
Message classifier.

Decides which handler variant an inbound message belongs to and which payload
that handler receives. The ``type`` tag alone is not enough: text messages are
split into referrals, product enquiries and plain text, interactive replies
are split by their own ``type``, and messages without a usable tag are
recognised from whichever payload is populated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from wacloud.core.events.errors import UnsupportedMessageType
from wacloud.core.events.event_types import MessageType, parse_message_type
from wacloud.webhooks.whatsapp.message import WhatsAppMessage
from wacloud.webhooks.whatsapp.message_types import (
    Button,
    ButtonReply,
    FlowReply,
    Interactive,
    ListReply,
    Location,
    MediaInfo,
    Order,
    Reaction,
    ReferralNotification,
    System,
    TextContent,
)


class MessageVariant(str, Enum):
    """Handler slot a message is routed to."""

    TEXT = "text"
    REFERRAL = "referral"
    PRODUCT_ENQUIRY = "product_enquiry"
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACTS = "contacts"
    REACTION = "reaction"
    ORDER = "order"
    BUTTON = "button"
    SYSTEM = "system"
    CUSTOMER_IDENTITY_CHANGE = "customer_identity_change"
    LIST_REPLY = "list_reply"
    BUTTON_REPLY = "button_reply"
    FLOW_REPLY = "flow_reply"
    INTERACTIVE = "interactive"
    UNKNOWN = "unknown"
    UNSUPPORTED = "unsupported"
    REQUEST_WELCOME = "request_welcome"

    @property
    def is_media(self) -> bool:
        return self in MEDIA_VARIANTS


MEDIA_VARIANTS = frozenset(
    {
        MessageVariant.AUDIO,
        MessageVariant.VIDEO,
        MessageVariant.IMAGE,
        MessageVariant.DOCUMENT,
        MessageVariant.STICKER,
    }
)

_MEDIA_VARIANT_BY_TYPE = {
    MessageType.AUDIO: MessageVariant.AUDIO,
    MessageType.VIDEO: MessageVariant.VIDEO,
    MessageType.IMAGE: MessageVariant.IMAGE,
    MessageType.DOCUMENT: MessageVariant.DOCUMENT,
    MessageType.STICKER: MessageVariant.STICKER,
}

_INTERACTIVE_VARIANT_BY_TYPE = {
    "list_reply": MessageVariant.LIST_REPLY,
    "button_reply": MessageVariant.BUTTON_REPLY,
    "nfm_reply": MessageVariant.FLOW_REPLY,
}


@dataclass(frozen=True)
class ClassifiedMessage:
    """A message's variant together with the payload its handler receives."""

    variant: MessageVariant
    payload: Any


def classify_message(message: WhatsAppMessage) -> ClassifiedMessage:
    """
    Classify one inbound message.

    Rules are tried in order and the first match wins. Missing payload slots
    are replaced by an empty payload of the expected type; the message itself
    is never modified.

    Args:
        message: Decoded message record

    Returns:
        The variant and its typed payload

    Raises:
        UnsupportedMessageType: If no rule matches
    """
    message_type = parse_message_type(message.type)

    if message_type is MessageType.ORDER:
        return ClassifiedMessage(MessageVariant.ORDER, message.order or Order())

    if message_type is MessageType.BUTTON:
        return ClassifiedMessage(MessageVariant.BUTTON, message.button or Button())

    if message_type.is_media:
        media = getattr(message, message_type.value) or MediaInfo()
        return ClassifiedMessage(_MEDIA_VARIANT_BY_TYPE[message_type], media)

    if message_type is MessageType.INTERACTIVE:
        return _classify_interactive(message.interactive or Interactive())

    if message_type is MessageType.SYSTEM:
        return ClassifiedMessage(MessageVariant.SYSTEM, message.system or System())

    if message_type is MessageType.UNKNOWN:
        return ClassifiedMessage(MessageVariant.UNKNOWN, list(message.errors))

    if message_type is MessageType.TEXT:
        return _classify_text(message)

    if message_type is MessageType.REACTION:
        return ClassifiedMessage(
            MessageVariant.REACTION, message.reaction or Reaction()
        )

    if message_type is MessageType.LOCATION:
        return ClassifiedMessage(
            MessageVariant.LOCATION, message.location or Location()
        )

    if message_type is MessageType.CONTACTS:
        return ClassifiedMessage(MessageVariant.CONTACTS, list(message.contacts))

    if message_type is MessageType.UNSUPPORTED:
        return ClassifiedMessage(MessageVariant.UNSUPPORTED, list(message.errors))

    if message_type is MessageType.REQUEST_WELCOME:
        return ClassifiedMessage(MessageVariant.REQUEST_WELCOME, message)

    # No usable tag: recognise the message from its populated payload
    if message.contacts:
        return ClassifiedMessage(MessageVariant.CONTACTS, list(message.contacts))
    if message.location is not None:
        return ClassifiedMessage(MessageVariant.LOCATION, message.location)
    if message.identity is not None:
        return ClassifiedMessage(
            MessageVariant.CUSTOMER_IDENTITY_CHANGE, message.identity
        )

    raise UnsupportedMessageType(message.id, message.type)


def _classify_text(message: WhatsAppMessage) -> ClassifiedMessage:
    text = message.text or TextContent()

    if message.referral is not None:
        return ClassifiedMessage(
            MessageVariant.REFERRAL,
            ReferralNotification(text=text, referral=message.referral),
        )

    if message.is_product_enquiry:
        return ClassifiedMessage(MessageVariant.PRODUCT_ENQUIRY, text)

    return ClassifiedMessage(MessageVariant.TEXT, text)


def _classify_interactive(interactive: Interactive) -> ClassifiedMessage:
    variant = _INTERACTIVE_VARIANT_BY_TYPE.get(interactive.type.strip().lower())

    if variant is MessageVariant.LIST_REPLY:
        return ClassifiedMessage(variant, interactive.list_reply or ListReply())
    if variant is MessageVariant.BUTTON_REPLY:
        return ClassifiedMessage(variant, interactive.button_reply or ButtonReply())
    if variant is MessageVariant.FLOW_REPLY:
        return ClassifiedMessage(variant, interactive.nfm_reply or FlowReply())

    return ClassifiedMessage(MessageVariant.INTERACTIVE, interactive)

