"""
Dispatch context management using contextvars for automatic propagation.

The dispatcher sets the business account for each entry and the sender for
each message it routes, so every log line emitted by a handler carries them
without parameter passing.
"""

from contextvars import ContextVar

_account_context: ContextVar[str | None] = ContextVar(
    "account_id", default=None
)  # Entry id (WhatsApp Business Account)
_user_context: ContextVar[str | None] = ContextVar(
    "user_id", default=None
)  # Sender wa_id


def set_request_context(
    account_id: str | None = None,
    user_id: str | None = None,
) -> None:
    """
    Set the logging context for the current async context.

    Args:
        account_id: Business account identifier taken from the notification entry
        user_id: WhatsApp id of the message sender
    """
    if account_id is not None:
        _account_context.set(account_id)
    if user_id is not None:
        _user_context.set(user_id)


def get_current_account_context() -> str | None:
    """Get the current business account id, or None if not set."""
    return _account_context.get()


def get_current_user_context() -> str | None:
    """Get the current sender id, or None if not set."""
    return _user_context.get()


def clear_user_context() -> None:
    """Forget the sender while keeping the account."""
    _user_context.set(None)


def clear_request_context() -> None:
    """
    Clear the request context.

    Context is isolated per asyncio task already; this is for reuse of a
    task across notifications and for tests.
    """
    _account_context.set(None)
    _user_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """
    Get current context information for debugging.

    Returns:
        Dictionary with current account_id and user_id
    """
    return {
        "account_id": get_current_account_context(),
        "user_id": get_current_user_context(),
    }
