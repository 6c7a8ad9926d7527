"""
WhatsApp interactive message schema.

Replies to interactive messages: list selections, reply buttons and flow
completions (``nfm_reply``).
"""

import json
from typing import Any

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import WireModel


class ButtonReply(WireModel):
    """Reply data from an interactive button."""

    id: str = ""
    title: str = ""


class ListReply(WireModel):
    """Reply data from an interactive list selection."""

    id: str = ""
    title: str = ""
    description: str = ""


class FlowReply(WireModel):
    """
    Reply sent when a customer completes a flow.

    ``response_json`` holds the flow's output as a JSON encoded string.
    """

    name: str = ""
    body: str = ""
    response_json: str = ""

    def response(self) -> dict[str, Any]:
        """
        Decode ``response_json``.

        Returns:
            The decoded object, or an empty dict when there is no response

        Raises:
            ValueError: If the response is not a JSON object
        """
        if not self.response_json:
            return {}
        data = json.loads(self.response_json)
        if not isinstance(data, dict):
            raise ValueError("flow response_json is not a JSON object")
        return data


class Interactive(WireModel):
    """Interactive reply; ``type`` names which of the reply slots is populated."""

    type: str = ""
    button_reply: ButtonReply | None = None
    list_reply: ListReply | None = None
    nfm_reply: FlowReply | None = Field(default=None, description="Flow completion")
