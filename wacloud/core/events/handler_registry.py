"""
Handler registry for the notification dispatcher.

One optional handler per message variant, plus slots for status updates,
envelope errors, user preference changes, unclassifiable messages and each
business account change field. Build the registry at startup, hand it to a
``NotificationDispatcher`` (which freezes it) and share it across requests.

Every ``on_*`` method returns the handler unchanged so it doubles as a
decorator::

    registry = HandlerRegistry()

    @registry.on_text_message
    async def echo(ctx, notification_ctx, info, text):
        ...

Handlers may be coroutine functions or plain callables.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from wacloud.core.events.classifier import MEDIA_VARIANTS, MessageVariant
from wacloud.core.events.contexts import (
    BusinessNotificationContext,
    DispatchContext,
    MessageInfo,
    NotificationContext,
)
from wacloud.core.events.errors import RegistryFrozenError
from wacloud.core.events.event_types import ChangeField, parse_change_field

MessageHandler = Callable[
    [DispatchContext, NotificationContext, MessageInfo, Any], Awaitable[None] | None
]
NotificationHandler = Callable[
    [DispatchContext, NotificationContext, Any], Awaitable[None] | None
]
BusinessEventHandler = Callable[
    [DispatchContext, BusinessNotificationContext, Any], Awaitable[None] | None
]

HandlerT = TypeVar("HandlerT", bound=Callable[..., Any])


def _variant_registrar(variant: MessageVariant):
    def register(self: "HandlerRegistry", handler: HandlerT) -> HandlerT:
        return self.register(variant, handler)

    register.__name__ = f"on_{variant.value}_message"
    register.__doc__ = f"Register the handler for {variant.value} messages."
    return register


def _business_registrar(field: ChangeField):
    def register(self: "HandlerRegistry", handler: HandlerT) -> HandlerT:
        return self.on_business_event(field)(handler)

    register.__doc__ = f"Register the handler for {field.value} changes."
    return register


class HandlerRegistry:
    """Routing table from message variants and change fields to handlers."""

    def __init__(self):
        self._message_handlers: dict[MessageVariant, MessageHandler] = {}
        self._business_handlers: dict[ChangeField, BusinessEventHandler] = {}
        self._status_handler: NotificationHandler | None = None
        self._error_handler: NotificationHandler | None = None
        self._user_preferences_handler: NotificationHandler | None = None
        self._unclassified_handler: MessageHandler | None = None
        self._frozen = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def freeze(self) -> "HandlerRegistry":
        """Make the registry read-only. Safe to call more than once."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _ensure_mutable(self, handler: Any) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                "handlers must be registered before the dispatcher is created"
            )
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")

    # ------------------------------------------------------------------
    # Message variants
    # ------------------------------------------------------------------

    def register(self, variant: MessageVariant, handler: HandlerT) -> HandlerT:
        """
        Register the handler for a message variant, replacing any previous one.

        Args:
            variant: Message variant to handle
            handler: ``handler(ctx, notification_ctx, info, payload)``

        Returns:
            The handler, so the method can be used as a decorator

        Raises:
            RegistryFrozenError: If the registry is frozen
            TypeError: If ``handler`` is not callable
        """
        self._ensure_mutable(handler)
        self._message_handlers[MessageVariant(variant)] = handler
        return handler

    def on(self, variant: MessageVariant) -> Callable[[HandlerT], HandlerT]:
        """Decorator form of ``register``."""

        def decorator(handler: HandlerT) -> HandlerT:
            return self.register(variant, handler)

        return decorator

    def get(self, variant: MessageVariant) -> MessageHandler | None:
        return self._message_handlers.get(variant)

    on_text_message = _variant_registrar(MessageVariant.TEXT)
    on_referral_message = _variant_registrar(MessageVariant.REFERRAL)
    on_product_enquiry = _variant_registrar(MessageVariant.PRODUCT_ENQUIRY)
    on_audio_message = _variant_registrar(MessageVariant.AUDIO)
    on_video_message = _variant_registrar(MessageVariant.VIDEO)
    on_image_message = _variant_registrar(MessageVariant.IMAGE)
    on_document_message = _variant_registrar(MessageVariant.DOCUMENT)
    on_sticker_message = _variant_registrar(MessageVariant.STICKER)
    on_location_message = _variant_registrar(MessageVariant.LOCATION)
    on_contacts_message = _variant_registrar(MessageVariant.CONTACTS)
    on_reaction_message = _variant_registrar(MessageVariant.REACTION)
    on_order_message = _variant_registrar(MessageVariant.ORDER)
    on_button_message = _variant_registrar(MessageVariant.BUTTON)
    on_system_message = _variant_registrar(MessageVariant.SYSTEM)
    on_customer_identity_change = _variant_registrar(
        MessageVariant.CUSTOMER_IDENTITY_CHANGE
    )
    on_list_reply = _variant_registrar(MessageVariant.LIST_REPLY)
    on_button_reply = _variant_registrar(MessageVariant.BUTTON_REPLY)
    on_flow_reply = _variant_registrar(MessageVariant.FLOW_REPLY)
    on_interactive_message = _variant_registrar(MessageVariant.INTERACTIVE)
    on_unknown_message = _variant_registrar(MessageVariant.UNKNOWN)
    on_unsupported_message = _variant_registrar(MessageVariant.UNSUPPORTED)
    on_request_welcome = _variant_registrar(MessageVariant.REQUEST_WELCOME)

    def on_media_message(self, handler: HandlerT) -> HandlerT:
        """Register one handler for audio, video, image, document and sticker."""
        for variant in sorted(MEDIA_VARIANTS):
            self.register(variant, handler)
        return handler

    def on_unclassified_message(self, handler: HandlerT) -> HandlerT:
        """
        Register a fallback for messages no classification rule matches.

        The handler receives the raw ``WhatsAppMessage`` as payload. The
        classification failure is still recorded in the dispatch outcome.
        """
        self._ensure_mutable(handler)
        self._unclassified_handler = handler
        return handler

    @property
    def unclassified_handler(self) -> MessageHandler | None:
        return self._unclassified_handler

    # ------------------------------------------------------------------
    # Statuses, envelope errors and preferences
    # ------------------------------------------------------------------

    def on_status_change(self, handler: HandlerT) -> HandlerT:
        """Register ``handler(ctx, notification_ctx, status)``, called per status."""
        self._ensure_mutable(handler)
        self._status_handler = handler
        return handler

    def on_notification_error(self, handler: HandlerT) -> HandlerT:
        """Register ``handler(ctx, notification_ctx, error)``, called per envelope error."""
        self._ensure_mutable(handler)
        self._error_handler = handler
        return handler

    def on_user_preferences(self, handler: HandlerT) -> HandlerT:
        """Register ``handler(ctx, notification_ctx, preferences)``, called per change."""
        self._ensure_mutable(handler)
        self._user_preferences_handler = handler
        return handler

    @property
    def status_handler(self) -> NotificationHandler | None:
        return self._status_handler

    @property
    def error_handler(self) -> NotificationHandler | None:
        return self._error_handler

    @property
    def user_preferences_handler(self) -> NotificationHandler | None:
        return self._user_preferences_handler

    # ------------------------------------------------------------------
    # Business account changes
    # ------------------------------------------------------------------

    def on_business_event(
        self, field: ChangeField | str
    ) -> Callable[[HandlerT], HandlerT]:
        """
        Decorator registering ``handler(ctx, business_ctx, event)`` for a change field.

        Raises:
            ValueError: If ``field`` is not a business account change field
        """
        change_field = parse_change_field(field)
        if not change_field.is_business_event:
            raise ValueError(f"{field!r} is not a business account change field")

        def decorator(handler: HandlerT) -> HandlerT:
            self._ensure_mutable(handler)
            self._business_handlers[change_field] = handler
            return handler

        return decorator

    def get_business_handler(self, field: ChangeField) -> BusinessEventHandler | None:
        return self._business_handlers.get(field)

    on_flow_event = _business_registrar(ChangeField.FLOWS)
    on_account_alert = _business_registrar(ChangeField.ACCOUNT_ALERTS)
    on_template_status_update = _business_registrar(ChangeField.TEMPLATE_STATUS_UPDATE)
    on_template_category_update = _business_registrar(
        ChangeField.TEMPLATE_CATEGORY_UPDATE
    )
    on_template_quality_update = _business_registrar(
        ChangeField.TEMPLATE_QUALITY_UPDATE
    )
    on_phone_number_name_update = _business_registrar(
        ChangeField.PHONE_NUMBER_NAME_UPDATE
    )
    on_phone_number_quality_update = _business_registrar(
        ChangeField.PHONE_NUMBER_QUALITY_UPDATE
    )
    on_account_update = _business_registrar(ChangeField.ACCOUNT_UPDATE)
    on_account_review_update = _business_registrar(ChangeField.ACCOUNT_REVIEW_UPDATE)
    on_capability_update = _business_registrar(ChangeField.BUSINESS_CAPABILITY_UPDATE)
    on_account_settings_update = _business_registrar(
        ChangeField.ACCOUNT_SETTINGS_UPDATE
    )

    def summary(self) -> dict[str, list[str]]:
        """Names of the registered slots, for startup logging."""
        return {
            "messages": sorted(variant.value for variant in self._message_handlers),
            "business": sorted(field.value for field in self._business_handlers),
            "other": [
                name
                for name, handler in (
                    ("status", self._status_handler),
                    ("error", self._error_handler),
                    ("user_preferences", self._user_preferences_handler),
                    ("unclassified", self._unclassified_handler),
                )
                if handler is not None
            ],
        }
