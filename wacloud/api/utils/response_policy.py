"""
Translation of dispatch outcomes and decode errors into HTTP status codes.

Meta disables a webhook subscription after repeated non-2xx answers, so
partial failures answer 200 by default and are only logged. Set
``treat_partial_as_500`` to surface them to the wire instead.
"""

from dataclasses import dataclass

from wacloud.core.events.errors import (
    DecodeError,
    MalformedPayload,
    PayloadTooLarge,
    SignatureVerificationError,
)
from wacloud.core.events.outcome import DispatchOutcome, OutcomeStatus

# Error type -> HTTP status for failures raised before dispatch
ERROR_STATUS_MAPPING: dict[type[Exception], int] = {
    PayloadTooLarge: 413,
    MalformedPayload: 400,
    SignatureVerificationError: 401,
}


@dataclass(frozen=True)
class ResponsePolicy:
    """Maps a ``DispatchOutcome`` to the status code the webhook answers with."""

    treat_partial_as_500: bool = False

    def status_code_for(self, outcome: DispatchOutcome) -> int:
        if outcome.status is OutcomeStatus.SUCCESS:
            return 200
        if outcome.status is OutcomeStatus.PARTIAL_FAILURE:
            return 500 if self.treat_partial_as_500 else 200
        return 500


def map_error_to_status(error: Exception) -> int:
    """
    Map a pre-dispatch error to an HTTP status code.

    Args:
        error: Exception raised while validating or decoding the request

    Returns:
        The mapped status; 400 for other decode errors, 500 for anything else
    """
    for error_type, status_code in ERROR_STATUS_MAPPING.items():
        if isinstance(error, error_type):
            return status_code
    if isinstance(error, DecodeError):
        return 400
    return 500
