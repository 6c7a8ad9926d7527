"""
Message type tags and change fields known to the dispatch engine.

Both lookups are total: an unknown value maps to ``UNRECOGNIZED`` and the
caller decides whether that is an error.
"""

from enum import Enum


class MessageType(str, Enum):
    """Wire ``type`` tag of an inbound message."""

    TEXT = "text"
    BUTTON = "button"
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    STICKER = "sticker"
    INTERACTIVE = "interactive"
    ORDER = "order"
    SYSTEM = "system"
    UNKNOWN = "unknown"
    LOCATION = "location"
    REACTION = "reaction"
    CONTACTS = "contacts"
    UNSUPPORTED = "unsupported"
    REQUEST_WELCOME = "request_welcome"
    UNRECOGNIZED = ""

    @property
    def is_media(self) -> bool:
        return self in _MEDIA_TYPES

    @property
    def is_recognized(self) -> bool:
        return self is not MessageType.UNRECOGNIZED


_MEDIA_TYPES = frozenset(
    {
        MessageType.AUDIO,
        MessageType.VIDEO,
        MessageType.IMAGE,
        MessageType.DOCUMENT,
        MessageType.STICKER,
    }
)

_MESSAGE_TYPES_BY_TAG = {
    member.value: member
    for member in MessageType
    if member is not MessageType.UNRECOGNIZED
}


def parse_message_type(tag: str | None) -> MessageType:
    """
    Map a wire type tag to its ``MessageType``.

    Matching ignores case and surrounding whitespace.

    Args:
        tag: The raw ``type`` value of a message, possibly None

    Returns:
        The matching member, or ``MessageType.UNRECOGNIZED``
    """
    if not tag:
        return MessageType.UNRECOGNIZED
    return _MESSAGE_TYPES_BY_TAG.get(tag.strip().lower(), MessageType.UNRECOGNIZED)


class ChangeField(str, Enum):
    """Wire ``field`` of a change, naming what kind of event it carries."""

    MESSAGES = "messages"
    USER_PREFERENCES = "user_preferences"
    FLOWS = "flows"
    ACCOUNT_ALERTS = "account_alerts"
    TEMPLATE_STATUS_UPDATE = "message_template_status_update"
    TEMPLATE_CATEGORY_UPDATE = "template_category_update"
    TEMPLATE_QUALITY_UPDATE = "message_template_quality_update"
    PHONE_NUMBER_NAME_UPDATE = "phone_number_name_update"
    PHONE_NUMBER_QUALITY_UPDATE = "phone_number_quality_update"
    ACCOUNT_UPDATE = "account_update"
    ACCOUNT_REVIEW_UPDATE = "account_review_update"
    BUSINESS_CAPABILITY_UPDATE = "business_capability_update"
    ACCOUNT_SETTINGS_UPDATE = "account_settings_update"
    UNRECOGNIZED = ""

    @property
    def is_business_event(self) -> bool:
        """True for business account fields, which bypass message dispatch."""
        return self not in (
            ChangeField.MESSAGES,
            ChangeField.USER_PREFERENCES,
            ChangeField.UNRECOGNIZED,
        )


_CHANGE_FIELDS_BY_NAME = {
    member.value: member
    for member in ChangeField
    if member is not ChangeField.UNRECOGNIZED
}


def parse_change_field(field: str | None) -> ChangeField:
    """Map a change ``field`` to its ``ChangeField``, ``UNRECOGNIZED`` when unknown."""
    if not field:
        return ChangeField.UNRECOGNIZED
    return _CHANGE_FIELDS_BY_NAME.get(field.strip().lower(), ChangeField.UNRECOGNIZED)
