"""Result of dispatching one notification."""

from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    FATAL = "fatal"


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Summary of a dispatch call.

    Attributes:
        status: Overall result
        errors: Recoverable errors in the order they were raised
        fatal_error: The error that stopped dispatch, when status is FATAL
        handled: Number of handler invocations
        skipped: Number of units with no registered handler
    """

    status: OutcomeStatus
    errors: tuple[Exception, ...] = field(default_factory=tuple)
    fatal_error: BaseException | None = None
    handled: int = 0
    skipped: int = 0

    @classmethod
    def from_errors(
        cls, errors: list[Exception], *, handled: int = 0, skipped: int = 0
    ) -> "DispatchOutcome":
        status = OutcomeStatus.PARTIAL_FAILURE if errors else OutcomeStatus.SUCCESS
        return cls(status, tuple(errors), None, handled, skipped)

    @classmethod
    def fatal(
        cls,
        error: BaseException,
        errors: list[Exception],
        *,
        handled: int = 0,
        skipped: int = 0,
    ) -> "DispatchOutcome":
        return cls(OutcomeStatus.FATAL, tuple(errors), error, handled, skipped)

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @property
    def is_partial_failure(self) -> bool:
        return self.status is OutcomeStatus.PARTIAL_FAILURE

    @property
    def is_fatal(self) -> bool:
        return self.status is OutcomeStatus.FATAL

    def as_exception_group(self) -> ExceptionGroup | None:
        """Bundle the recorded errors, or None when nothing was recorded."""
        if not self.errors:
            return None
        return ExceptionGroup(
            f"{len(self.errors)} webhook handler(s) failed", list(self.errors)
        )
