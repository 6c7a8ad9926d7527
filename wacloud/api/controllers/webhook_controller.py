"""
Webhook controller.

Routes handle HTTP parameters; the controller owns the processing pipeline:
size guard, signature check, decode, dispatch and status translation. The
dispatch runs to completion before the response is written.
"""

from fastapi import HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from wacloud.api.utils.response_policy import ResponsePolicy, map_error_to_status
from wacloud.core.events.contexts import DispatchContext
from wacloud.core.events.decoder import PAYLOAD_MAX_SIZE, decode_notification
from wacloud.core.events.errors import (
    DecodeError,
    PayloadTooLarge,
    SignatureVerificationError,
)
from wacloud.core.events.event_dispatcher import NotificationDispatcher
from wacloud.core.events.outcome import DispatchOutcome
from wacloud.core.logging.logger import get_logger
from wacloud.webhooks.whatsapp.validators import (
    SIGNATURE_HEADER,
    verify_payload_signature,
)


class WebhookController:
    """
    Handles subscription verification and notification delivery.

    Args:
        dispatcher: Dispatcher holding the application's handlers
        verify_token: Token expected in the subscription handshake
        app_secret: App secret used to check request signatures
        validate_signature: Reject requests without a valid signature
        response_policy: Outcome to status code mapping
        max_payload_size: Largest accepted body, in bytes
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        *,
        verify_token: str | None = None,
        app_secret: str | None = None,
        validate_signature: bool = False,
        response_policy: ResponsePolicy | None = None,
        max_payload_size: int = PAYLOAD_MAX_SIZE,
    ):
        if validate_signature and not app_secret:
            raise ValueError("app_secret is required when validate_signature is on")

        self.dispatcher = dispatcher
        self.verify_token = verify_token
        self.app_secret = app_secret
        self.validate_signature = validate_signature
        self.response_policy = response_policy or ResponsePolicy()
        self.max_payload_size = max_payload_size
        self.logger = get_logger(__name__)

    async def verify_webhook(
        self,
        hub_mode: str | None = None,
        hub_verify_token: str | None = None,
        hub_challenge: str | None = None,
    ) -> PlainTextResponse:
        """
        Answer the subscription handshake.

        Returns:
            PlainTextResponse echoing the challenge

        Raises:
            HTTPException: 403 when the mode or token is wrong
        """
        if hub_mode != "subscribe":
            self.logger.error(f"❌ Invalid hub.mode for verification: {hub_mode!r}")
            raise HTTPException(status_code=403, detail="Invalid hub.mode")

        if not self.verify_token or hub_verify_token != self.verify_token:
            self.logger.error("❌ Invalid verification token received")
            raise HTTPException(status_code=403, detail="Invalid verification token")

        self.logger.info("✅ Webhook verification successful")
        return PlainTextResponse(content=hub_challenge or "")

    async def process_webhook(self, request: Request) -> Response:
        """
        Process a notification delivery.

        Args:
            request: Incoming POST request carrying the notification body

        Returns:
            Empty response whose status code comes from the response policy

        Raises:
            HTTPException: 413, 400 or 401 when the request is rejected before
                dispatch
        """
        self._check_content_length(request)

        body = await request.body()

        try:
            if self.validate_signature:
                verify_payload_signature(
                    request.headers.get(SIGNATURE_HEADER), body, self.app_secret
                )
            notification = decode_notification(body, max_size=self.max_payload_size)
        except (DecodeError, SignatureVerificationError) as e:
            status_code = map_error_to_status(e)
            self.logger.error(f"Rejected webhook ({status_code}): {e}")
            raise HTTPException(status_code=status_code, detail=str(e)) from e

        ctx = DispatchContext(values={"request": request})
        outcome = await self.dispatcher.dispatch(notification, ctx)
        self._log_outcome(ctx, outcome)

        return Response(status_code=self.response_policy.status_code_for(outcome))

    def _check_content_length(self, request: Request) -> None:
        declared = request.headers.get("content-length")
        if declared is None or not declared.isdigit():
            return
        if int(declared) > self.max_payload_size:
            e = PayloadTooLarge(int(declared), self.max_payload_size)
            self.logger.error(f"Rejected webhook (413): {e}")
            raise HTTPException(status_code=413, detail=str(e))

    def _log_outcome(self, ctx: DispatchContext, outcome: DispatchOutcome) -> None:
        if outcome.is_fatal:
            self.logger.error(
                f"Webhook {ctx.request_id} stopped by fatal error: {outcome.fatal_error}"
            )
        for error in outcome.errors:
            self.logger.warning(
                f"Webhook {ctx.request_id} handler error: "
                f"{type(error).__name__}: {error}"
            )
        if outcome.is_success:
            self.logger.debug(
                f"Webhook {ctx.request_id} processed ({outcome.handled} handler calls)"
            )
