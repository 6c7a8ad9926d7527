"""
Webhook routes for the WhatsApp Cloud API.

Routes handle HTTP concerns only and delegate to ``WebhookController``.
"""

from fastapi import APIRouter, Query, Request

from wacloud.api.controllers.webhook_controller import WebhookController


def create_webhook_router(webhook_controller: WebhookController) -> APIRouter:
    """
    Create the webhook router.

    Args:
        webhook_controller: Controller wired with the application's dispatcher

    Returns:
        APIRouter exposing ``GET`` and ``POST /webhook/whatsapp``
    """
    router = APIRouter(
        prefix="/webhook",
        tags=["Webhooks"],
        responses={
            400: {"description": "Bad Request - Malformed notification body"},
            401: {"description": "Unauthorized - Invalid request signature"},
            403: {"description": "Forbidden - Webhook verification failed"},
            413: {"description": "Payload Too Large"},
            500: {"description": "Internal Server Error - Dispatch failed"},
        },
    )

    @router.get("/whatsapp")
    async def verify_webhook(
        hub_mode: str = Query(None, alias="hub.mode"),
        hub_verify_token: str = Query(None, alias="hub.verify_token"),
        hub_challenge: str = Query(None, alias="hub.challenge"),
    ):
        """Handle the subscription verification handshake."""
        return await webhook_controller.verify_webhook(
            hub_mode=hub_mode,
            hub_verify_token=hub_verify_token,
            hub_challenge=hub_challenge,
        )

    @router.post("/whatsapp")
    async def process_webhook(request: Request):
        """
        Receive a notification.

        The raw body is read by the controller so the signature can be checked
        against the exact bytes that were signed.
        """
        return await webhook_controller.process_webhook(request)

    return router
