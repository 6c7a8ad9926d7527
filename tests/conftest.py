"""
Pytest configuration and common fixtures for wacloud tests.

Provides builders for webhook payloads shaped like the ones the WhatsApp
Cloud API delivers, plus a fresh handler registry per test.
"""

import json
from collections.abc import Callable
from typing import Any

import pytest

from wacloud.core.events.handler_registry import HandlerRegistry
from wacloud.core.logging.context import clear_request_context

BUSINESS_ACCOUNT_ID = "102290129340398"
PHONE_NUMBER_ID = "106540352242922"
CUSTOMER_WA_ID = "5511999990000"


@pytest.fixture(autouse=True)
def isolated_request_context():
    """Start and end every test without logging context."""
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def build_message() -> Callable[..., dict[str, Any]]:
    """Build one inbound message record; ``type_=None`` omits the tag."""

    def _build(
        type_: str | None = "text",
        message_id: str = "wamid.HBgLMTU1NTAwMDAwMDAVAgASGBQzQTc=",
        sender: str = CUSTOMER_WA_ID,
        **fields: Any,
    ) -> dict[str, Any]:
        message: dict[str, Any] = {
            "from": sender,
            "id": message_id,
            "timestamp": "1700000000",
        }
        if type_ is not None:
            message["type"] = type_
        if type_ == "text" and "text" not in fields:
            message["text"] = {"body": "hello"}
        message.update(fields)
        return message

    return _build


@pytest.fixture
def build_change() -> Callable[..., dict[str, Any]]:
    """Build a change; messaging lists are only included when given."""

    def _build(
        *,
        field: str = "messages",
        messages: list[dict[str, Any]] | None = None,
        statuses: list[dict[str, Any]] | None = None,
        errors: list[dict[str, Any]] | None = None,
        **value_fields: Any,
    ) -> dict[str, Any]:
        value: dict[str, Any] = {}
        if field in ("messages", "user_preferences"):
            value = {
                "messaging_product": "whatsapp",
                "metadata": {
                    "display_phone_number": "15550783881",
                    "phone_number_id": PHONE_NUMBER_ID,
                },
                "contacts": [
                    {"profile": {"name": "Sheena Nelson"}, "wa_id": CUSTOMER_WA_ID}
                ],
            }
        if messages is not None:
            value["messages"] = messages
        if statuses is not None:
            value["statuses"] = statuses
        if errors is not None:
            value["errors"] = errors
        value.update(value_fields)
        return {"field": field, "value": value}

    return _build


@pytest.fixture
def build_entry() -> Callable[..., dict[str, Any]]:
    def _build(*changes: dict[str, Any], entry_id: str = BUSINESS_ACCOUNT_ID):
        return {"id": entry_id, "time": 1700000000, "changes": list(changes)}

    return _build


@pytest.fixture
def build_notification() -> Callable[..., dict[str, Any]]:
    def _build(*entries: dict[str, Any]) -> dict[str, Any]:
        return {"object": "whatsapp_business_account", "entry": list(entries)}

    return _build


@pytest.fixture
def text_notification_body(build_notification, build_entry, build_change, build_message):
    """Raw JSON body of a notification carrying one text message."""
    payload = build_notification(
        build_entry(build_change(messages=[build_message("text")]))
    )
    return json.dumps(payload).encode("utf-8")
