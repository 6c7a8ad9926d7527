"""
FastAPI application factory for the webhook service.

Wires settings, dispatcher, controller and routes around a handler registry
built by the embedding application::

    registry = HandlerRegistry()

    @registry.on_text_message
    async def on_text(ctx, notification_ctx, info, text): ...

    app = create_app(registry)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wacloud.api.controllers.webhook_controller import WebhookController
from wacloud.api.routes.health import create_health_router
from wacloud.api.routes.webhooks import create_webhook_router
from wacloud.api.utils.response_policy import ResponsePolicy
from wacloud.core.config.settings import Settings
from wacloud.core.config.settings import settings as default_settings
from wacloud.core.events.event_dispatcher import NotificationDispatcher
from wacloud.core.events.handler_registry import HandlerRegistry
from wacloud.core.logging.logger import get_app_logger, setup_app_logging


def create_controller(
    registry: HandlerRegistry, settings: Settings | None = None
) -> WebhookController:
    """
    Build the webhook controller for a registry.

    Args:
        registry: Handlers to dispatch to; frozen by this call
        settings: Configuration, the process-wide settings when omitted

    Returns:
        WebhookController configured from settings
    """
    settings = settings or default_settings
    return WebhookController(
        NotificationDispatcher(registry),
        verify_token=settings.whatsapp_webhook_verify_token,
        app_secret=settings.whatsapp_app_secret,
        validate_signature=settings.validate_signature,
        response_policy=ResponsePolicy(
            treat_partial_as_500=settings.partial_failure_as_500
        ),
        max_payload_size=settings.max_payload_bytes,
    )


def create_app(
    registry: HandlerRegistry,
    settings: Settings | None = None,
    *,
    title: str = "wacloud webhook",
) -> FastAPI:
    """
    Create the FastAPI application.

    Logging is configured when the application starts.

    Args:
        registry: Handlers to dispatch to; frozen by this call
        settings: Configuration, the process-wide settings when omitted
        title: OpenAPI title

    Returns:
        FastAPI application with the webhook and health routes
    """
    settings = settings or default_settings
    controller = create_controller(registry, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_app_logging(settings)
        logger = get_app_logger()
        logger.info(
            f"🚀 {title} v{settings.version} starting ({settings.environment}), "
            f"signature validation {'on' if settings.validate_signature else 'off'}"
        )
        yield
        logger.info(f"{title} stopped")

    app = FastAPI(title=title, version=settings.version, lifespan=lifespan)
    app.state.webhook_controller = controller
    app.state.settings = settings
    app.include_router(create_webhook_router(controller))
    app.include_router(create_health_router(settings))
    return app
