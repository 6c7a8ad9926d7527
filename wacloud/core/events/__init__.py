"""
Events module for wacloud.

Decoding, classification and dispatch of WhatsApp Cloud API notifications.
"""

from .classifier import ClassifiedMessage, MessageVariant, classify_message
from .contexts import (
    BusinessNotificationContext,
    DispatchContext,
    MessageInfo,
    NotificationContext,
)
from .decoder import PAYLOAD_MAX_SIZE, decode_notification
from .errors import (
    DecodeError,
    FatalError,
    MalformedPayload,
    PayloadTooLarge,
    RecoverableError,
    RegistryFrozenError,
    SignatureVerificationError,
    UnsupportedMessageType,
    WebhookError,
    is_fatal,
)
from .event_dispatcher import NotificationDispatcher
from .event_types import ChangeField, MessageType, parse_change_field, parse_message_type
from .handler_registry import HandlerRegistry
from .outcome import DispatchOutcome, OutcomeStatus

__all__ = [
    # Types
    "ChangeField",
    "MessageType",
    "MessageVariant",
    "parse_change_field",
    "parse_message_type",
    # Decoding and classification
    "PAYLOAD_MAX_SIZE",
    "ClassifiedMessage",
    "classify_message",
    "decode_notification",
    # Dispatch
    "BusinessNotificationContext",
    "DispatchContext",
    "DispatchOutcome",
    "HandlerRegistry",
    "MessageInfo",
    "NotificationContext",
    "NotificationDispatcher",
    "OutcomeStatus",
    # Errors
    "DecodeError",
    "FatalError",
    "MalformedPayload",
    "PayloadTooLarge",
    "RecoverableError",
    "RegistryFrozenError",
    "SignatureVerificationError",
    "UnsupportedMessageType",
    "WebhookError",
    "is_fatal",
]
