"""
Signature validation for WhatsApp webhook requests.

Meta signs every notification body with the app secret and sends the result
in the ``X-Hub-Signature-256`` header as ``sha256=<hex digest>``.
"""

import hashlib
import hmac

from wacloud.core.events.errors import SignatureVerificationError
from wacloud.core.logging.logger import get_logger

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="

logger = get_logger(__name__)


def extract_signature(header: str | None) -> str:
    """
    Extract the hex digest from an ``X-Hub-Signature-256`` header value.

    Raises:
        SignatureVerificationError: If the header is missing or malformed
    """
    if not header:
        raise SignatureVerificationError(f"missing {SIGNATURE_HEADER} header")
    if not header.startswith(SIGNATURE_PREFIX):
        raise SignatureVerificationError(
            f"invalid signature format - must start with '{SIGNATURE_PREFIX}'"
        )
    return header[len(SIGNATURE_PREFIX) :]


def compute_signature(payload: bytes, secret: str) -> str:
    """HMAC-SHA256 hex digest of ``payload`` keyed with the app secret."""
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def validate_signature(payload: bytes, signature: str, secret: str) -> bool:
    """
    Compare a hex digest against the expected one in constant time.

    Args:
        payload: Raw request body
        signature: Hex digest without the ``sha256=`` prefix
        secret: WhatsApp app secret

    Returns:
        True if the signature matches
    """
    expected = compute_signature(payload, secret).encode("ascii")
    # Header values are client controlled and may hold non-ASCII characters
    provided = signature.lower().encode("utf-8", "replace")
    return hmac.compare_digest(expected, provided)


def verify_payload_signature(header: str | None, payload: bytes, secret: str) -> None:
    """
    Check the signature header of a webhook request.

    Args:
        header: Value of ``X-Hub-Signature-256``
        payload: Raw request body, exactly as received
        secret: WhatsApp app secret

    Raises:
        SignatureVerificationError: If the header is missing, malformed or wrong
    """
    signature = extract_signature(header)
    if not validate_signature(payload, signature, secret):
        logger.error("Webhook signature validation failed")
        raise SignatureVerificationError("signature does not match payload")
