"""
wacloud - WhatsApp Cloud API webhook dispatch engine.

Decode webhook notifications, classify every message and route it to the
handler registered for its variant.
"""

from .core.app import create_app
from .core.config.settings import settings
from .core.events import (
    DispatchContext,
    DispatchOutcome,
    FatalError,
    HandlerRegistry,
    MessageVariant,
    NotificationDispatcher,
    RecoverableError,
    decode_notification,
)

__version__ = settings.version

__all__ = [
    "DispatchContext",
    "DispatchOutcome",
    "FatalError",
    "HandlerRegistry",
    "MessageVariant",
    "NotificationDispatcher",
    "RecoverableError",
    "create_app",
    "decode_notification",
]
