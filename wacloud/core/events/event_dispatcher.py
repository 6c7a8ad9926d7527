"""
Notification dispatcher.

Walks every entry and change of a decoded notification and invokes the
registered handlers in wire order: for each change, envelope errors first,
then statuses, then user preference updates, then messages. Business account
changes go to the handler registered for their field instead.

Error policy: an exception for which ``is_fatal`` is true stops the walk and
yields a FATAL outcome; any other exception is recorded and the walk goes on.
Exceptions that are not ``Exception`` subclasses (cancellation, interpreter
exit) propagate untouched.
"""

import inspect
from typing import Any

from wacloud.core.events.classifier import ClassifiedMessage, classify_message
from wacloud.core.events.contexts import (
    BusinessNotificationContext,
    DispatchContext,
    MessageInfo,
    NotificationContext,
)
from wacloud.core.events.errors import UnsupportedMessageType, is_fatal
from wacloud.core.events.event_types import parse_change_field
from wacloud.core.events.handler_registry import HandlerRegistry
from wacloud.core.events.outcome import DispatchOutcome
from wacloud.core.logging.context import (
    clear_request_context,
    clear_user_context,
    get_context_info,
    set_request_context,
)
from wacloud.core.logging.logger import get_logger
from wacloud.webhooks.whatsapp.webhook_container import Change, Entry, Notification


class _FatalStop(Exception):
    """Unwinds the walk once a fatal handler error was seen."""

    def __init__(self, error: BaseException):
        self.error = error
        super().__init__(str(error))


class _DispatchRun:
    """Mutable bookkeeping of one dispatch call."""

    def __init__(self, ctx: DispatchContext):
        self.ctx = ctx
        self.errors: list[Exception] = []
        self.handled = 0
        self.skipped = 0


class NotificationDispatcher:
    """
    Routes decoded notifications to the handlers of a ``HandlerRegistry``.

    The registry is frozen on construction; one dispatcher is meant to be
    shared by every request. Dispatch runs handlers one at a time inside the
    caller's task and spawns nothing. There is no internal timeout: wrap
    ``dispatch`` in ``asyncio.timeout`` to bound latency.
    """

    def __init__(self, registry: HandlerRegistry):
        self.logger = get_logger(__name__)
        self._registry = registry.freeze()

        summary = registry.summary()
        self.logger.info(
            f"NotificationDispatcher ready: {len(summary['messages'])} message, "
            f"{len(summary['business'])} business handlers"
            + (f", plus {', '.join(summary['other'])}" if summary["other"] else "")
        )

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def dispatch(
        self, notification: Notification, ctx: DispatchContext | None = None
    ) -> DispatchOutcome:
        """
        Dispatch every unit of a notification.

        Args:
            notification: Decoded webhook body
            ctx: Request context forwarded to every handler; a fresh one is
                created when omitted

        Returns:
            SUCCESS when nothing failed, PARTIAL_FAILURE with the recorded
            errors, or FATAL when a handler aborted the walk
        """
        run = _DispatchRun(ctx or DispatchContext())
        previous_context = get_context_info()

        try:
            for entry, change in notification.iter_changes():
                clear_request_context()
                set_request_context(account_id=entry.id or None)
                await self._dispatch_change(run, notification, entry, change)
        except _FatalStop as stop:
            self.logger.error(
                f"Dispatch {run.ctx.request_id} aborted after {run.handled} "
                f"handler call(s): {stop.error}"
            )
            return DispatchOutcome.fatal(
                stop.error, run.errors, handled=run.handled, skipped=run.skipped
            )
        finally:
            clear_request_context()
            set_request_context(**previous_context)

        outcome = DispatchOutcome.from_errors(
            run.errors, handled=run.handled, skipped=run.skipped
        )
        self.logger.debug(
            f"Dispatch {run.ctx.request_id} finished: {outcome.status.value} "
            f"(handled={outcome.handled}, skipped={outcome.skipped}, "
            f"errors={len(outcome.errors)})"
        )
        return outcome

    async def _dispatch_change(
        self,
        run: _DispatchRun,
        notification: Notification,
        entry: Entry,
        change: Change,
    ) -> None:
        field = parse_change_field(change.field)
        if field.is_business_event:
            await self._dispatch_business_event(run, notification, entry, change)
            return

        notification_ctx = NotificationContext.from_change(notification, entry, change)
        value = change.value

        for error in value.errors:
            await self._invoke(
                run,
                self._registry.error_handler,
                (run.ctx, notification_ctx, error),
                "envelope error",
            )

        for status in value.statuses:
            await self._invoke(
                run,
                self._registry.status_handler,
                (run.ctx, notification_ctx, status),
                f"status {status.status or '?'} for {status.id or '?'}",
            )

        if value.user_preferences:
            await self._invoke(
                run,
                self._registry.user_preferences_handler,
                (run.ctx, notification_ctx, list(value.user_preferences)),
                f"{len(value.user_preferences)} user preference(s)",
            )

        for message in value.messages:
            set_request_context(user_id=message.sender or None)
            info = MessageInfo.from_message(message)
            try:
                classified = classify_message(message)
            except UnsupportedMessageType as e:
                await self._unclassified(run, notification_ctx, info, message, e)
                continue
            await self._dispatch_message(run, notification_ctx, info, classified)
        clear_user_context()

    async def _dispatch_message(
        self,
        run: _DispatchRun,
        notification_ctx: NotificationContext,
        info: MessageInfo,
        classified: ClassifiedMessage,
    ) -> None:
        handler = self._registry.get(classified.variant)
        await self._invoke(
            run,
            handler,
            (run.ctx, notification_ctx, info, classified.payload),
            f"{classified.variant.value} message {info.message_id or '?'}",
        )

    async def _unclassified(
        self,
        run: _DispatchRun,
        notification_ctx: NotificationContext,
        info: MessageInfo,
        message: Any,
        error: UnsupportedMessageType,
    ) -> None:
        self.logger.warning(str(error))
        run.errors.append(error)
        handler = self._registry.unclassified_handler
        if handler is not None:
            await self._invoke(
                run,
                handler,
                (run.ctx, notification_ctx, info, message),
                f"unclassified message {info.message_id or '?'}",
            )

    async def _dispatch_business_event(
        self,
        run: _DispatchRun,
        notification: Notification,
        entry: Entry,
        change: Change,
    ) -> None:
        field = parse_change_field(change.field)
        handler = self._registry.get_business_handler(field)
        if handler is None:
            run.skipped += 1
            self.logger.debug(f"No handler for {field.value} change, skipping")
            return

        try:
            event = change.value.business_event(field.value)
        except Exception as e:
            self.logger.warning(f"Could not read {field.value} change: {e}")
            run.errors.append(e)
            return

        business_ctx = BusinessNotificationContext.from_change(
            notification, entry, change
        )
        await self._invoke(
            run, handler, (run.ctx, business_ctx, event), f"{field.value} change"
        )

    async def _invoke(
        self,
        run: _DispatchRun,
        handler: Any,
        args: tuple[Any, ...],
        label: str,
    ) -> None:
        if handler is None:
            run.skipped += 1
            self.logger.debug(f"No handler for {label}, skipping")
            return

        self.logger.debug(f"→ {label} to {getattr(handler, '__name__', repr(handler))}")
        run.handled += 1
        try:
            result = handler(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            if is_fatal(e):
                raise _FatalStop(e) from e
            self.logger.warning(f"Handler for {label} failed: {e}")
            run.errors.append(e)
