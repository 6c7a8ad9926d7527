"""
Rich-based logger with business account and sender context for wacloud.

Context is added as a message prefix, pulled from contextvars on every call.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wacloud.core.config.settings import Settings, settings

_SHORT_NAMES = {
    "event_dispatcher": "events.dispatcher",
    "handler_registry": "events.registry",
    "webhook_controller": "api.webhook",
}


class CompactFormatter(logging.Formatter):
    """Formatter that shortens long wacloud module names."""

    def format(self, record):
        if record.name.startswith("wacloud."):
            parts = record.name.split(".")
            if len(parts) > 2:
                short = _SHORT_NAMES.get(parts[-1])
                record.name = short or ".".join(parts[-2:])

        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that prefixes messages with account and sender context.

    Explicitly bound values are used when no context variable is set.
    """

    def __init__(
        self,
        logger: logging.Logger,
        account_id: str | None = None,
        user_id: str | None = None,
    ):
        self.logger = logger
        self.account_id = account_id or "---"
        self.user_id = user_id or "---"

    def _format_message(self, message: str) -> str:
        """Add context prefix to message."""
        from .context import get_current_account_context, get_current_user_context

        current_account = get_current_account_context() or self.account_id
        current_user = get_current_user_context() or self.user_id

        if current_account and current_account != "---":
            if current_user and current_user != "---":
                return f"[A:{current_account}][U:{current_user}] {message}"
            return f"[A:{current_account}] {message}"
        elif current_user and current_user != "---":
            return f"[U:{current_user}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.logger.critical(self._format_message(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.logger.exception(self._format_message(message), *args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def bind(self, **kwargs) -> ContextLogger:
        """
        Create a new ContextLogger with additional or updated context.

        Args:
            **kwargs: ``account_id`` and/or ``user_id`` to override

        Returns:
            New ContextLogger instance with updated context

        Example:
            handler_logger = logger.bind(user_id="5511999990000")
        """
        return ContextLogger(
            self.logger,
            account_id=kwargs.get("account_id", self.account_id),
            user_id=kwargs.get("user_id", self.user_id),
        )


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" creates daily log files + console; anything else → console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    # RichHandler already shows level and time
    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"wacloud_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)
        _console.print(f"[green]DEV mode:[/] console + file → {logfile}")
    else:
        _console.print(f"Logging configured for mode '{mode}'. Console only.")

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    logging.getLogger("wacloud.logging").info(f"Logging initialized ({lvl})")


def setup_app_logging(app_settings: Settings | None = None) -> None:
    """
    Initialize application logging from settings.

    Called once during FastAPI application startup.

    Args:
        app_settings: Settings of the application, the process-wide settings
            when omitted
    """
    app_settings = app_settings or settings
    setup_logging(
        level=app_settings.log_level,
        mode="DEV" if app_settings.is_development else "PROD",
        log_dir=app_settings.log_dir if app_settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that picks up the current dispatch context.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_account_context, get_current_user_context

    return ContextLogger(
        logging.getLogger(name),
        account_id=get_current_account_context(),
        user_id=get_current_user_context(),
    )


def get_app_logger() -> ContextLogger:
    """Get application logger for startup and shutdown events."""
    return get_logger("wacloud.app")
