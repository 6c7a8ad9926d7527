"""
Notification envelope decoder.

Turns a raw webhook body into a ``Notification``. The size bound is checked
on the raw bytes before any parsing happens.
"""

from pydantic import ValidationError

from wacloud.core.events.errors import MalformedPayload, PayloadTooLarge
from wacloud.core.logging.logger import get_logger
from wacloud.webhooks.whatsapp.webhook_container import Notification

PAYLOAD_MAX_SIZE = 3 * 1024 * 1024

logger = get_logger(__name__)


def decode_notification(
    raw: bytes | bytearray | str, *, max_size: int = PAYLOAD_MAX_SIZE
) -> Notification:
    """
    Decode a webhook body into a Notification.

    Missing entries, changes or value sections decode to empty values. An
    empty body decodes to an empty Notification.

    Args:
        raw: Request body as received
        max_size: Largest accepted body, in bytes

    Returns:
        The decoded Notification

    Raises:
        PayloadTooLarge: If the body is larger than ``max_size``
        MalformedPayload: If the body is not JSON or not a notification object
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")

    size = len(raw)
    if size > max_size:
        raise PayloadTooLarge(size, max_size)

    if not raw.strip():
        return Notification()

    try:
        return Notification.model_validate_json(raw)
    except ValidationError as e:
        logger.debug(f"Rejected webhook body ({size} bytes): {e.error_count()} errors")
        raise MalformedPayload(_summarize(e)) from e


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    return f"invalid notification at {location}: {first['msg']}"
