"""
Error taxonomy for webhook decoding and dispatch.

Decode errors stop a request before dispatch starts. During dispatch a
handler signals failure by raising: ``FatalError`` (or any exception with a
truthy ``fatal`` attribute) aborts the notification, anything else is
recorded and processing moves on.
"""

from typing import Any


class WebhookError(Exception):
    """Base class for every error raised by wacloud."""


class DecodeError(WebhookError):
    """The raw notification body could not be turned into a Notification."""


class PayloadTooLarge(DecodeError):
    """The body exceeds the configured size bound."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"payload of {size} bytes exceeds the {limit} byte limit")


class MalformedPayload(DecodeError):
    """The body is not JSON or does not have the notification envelope shape."""


class RecoverableError(WebhookError):
    """A unit failed; remaining units should still be dispatched."""


class UnsupportedMessageType(RecoverableError):
    """No classification rule matched a message."""

    def __init__(self, message_id: str, type_tag: str):
        self.message_id = message_id
        self.type_tag = type_tag
        super().__init__(
            f"unsupported message type {type_tag!r} for message {message_id!r}"
        )


class FatalError(WebhookError):
    """
    A handler failure that must abort the remaining dispatch.

    Args:
        desc: Human readable description of what went wrong
        cause: Optional underlying exception, also chained as ``__cause__``
    """

    fatal = True

    def __init__(self, desc: str, cause: BaseException | None = None):
        self.desc = desc
        self.cause = cause
        super().__init__(desc)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"fatal error: {self.desc}: {self.cause}"
        return f"fatal error: {self.desc}"


class SignatureVerificationError(WebhookError):
    """The X-Hub-Signature-256 header is missing or does not match the body."""


class RegistryFrozenError(WebhookError, RuntimeError):
    """A handler was registered after the registry was frozen."""


def is_fatal(exc: Any) -> bool:
    """
    Tell whether an exception must stop dispatch.

    True for ``FatalError`` and for any exception exposing a truthy
    ``fatal`` attribute, so third-party errors can opt in without
    subclassing.
    """
    if isinstance(exc, FatalError):
        return True
    return bool(getattr(exc, "fatal", False))
