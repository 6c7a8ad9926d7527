"""Tests for the WhatsApp wire schemas."""

import json

import pytest
from pydantic import ValidationError

from wacloud.webhooks.whatsapp import (
    AccountUpdate,
    FlowEvent,
    PhoneNumberSettings,
    TemplateStatusUpdate,
    Value,
    WhatsAppMessage,
    WhatsAppMessageStatus,
)
from wacloud.webhooks.whatsapp.base_models import Contact, ErrorRecord
from wacloud.webhooks.whatsapp.message_types import FlowReply, Reaction


class TestMessageFlags:
    def test_plain_message(self, build_message):
        message = WhatsAppMessage.model_validate(build_message("text"))

        assert message.sender == "5511999990000"
        assert not message.is_reply
        assert not message.is_forwarded
        assert not message.is_product_enquiry
        assert not message.is_referral

    def test_reply(self, build_message):
        message = WhatsAppMessage.model_validate(
            build_message("text", context={"from": "15550783881", "id": "wamid.earlier"})
        )

        assert message.is_reply
        assert message.context.from_ == "15550783881"

    @pytest.mark.parametrize("flag", ["forwarded", "frequently_forwarded"])
    def test_forwarded_is_not_a_reply(self, build_message, flag):
        message = WhatsAppMessage.model_validate(build_message("text", context={flag: True}))

        assert message.is_forwarded
        assert not message.is_reply

    def test_product_enquiry_is_not_a_reply(self, build_message):
        message = WhatsAppMessage.model_validate(
            build_message(
                "text",
                context={
                    "from": "15550783881",
                    "id": "wamid.catalog",
                    "referred_product": {"catalog_id": "c1", "product_retailer_id": "sku-9"},
                },
            )
        )

        assert message.is_product_enquiry
        assert not message.is_reply
        assert message.context.referred_product.product_retailer_id == "sku-9"

    def test_referral(self, build_message):
        message = WhatsAppMessage.model_validate(
            build_message("text", referral={"source_url": "https://fb.me/ad", "source_type": "ad"})
        )

        assert message.is_referral


class TestPayloadRecords:
    def test_flow_reply_response(self):
        reply = FlowReply(name="flow", body="Sent", response_json=json.dumps({"plan": "gold"}))

        assert reply.response() == {"plan": "gold"}

    def test_flow_reply_without_response(self):
        assert FlowReply().response() == {}

    def test_flow_reply_non_object_response(self):
        with pytest.raises(ValueError):
            FlowReply(response_json="[1, 2]").response()

    def test_reaction_removal(self):
        assert Reaction(message_id="wamid.x", emoji="").is_removal
        assert not Reaction(message_id="wamid.x", emoji="👍").is_removal

    def test_contact_effective_id(self):
        assert Contact(wa_id="5511", user_id="BR.123").effective_id == "BR.123"
        assert Contact(wa_id="5511").effective_id == "5511"

    def test_failed_status(self):
        status = WhatsAppMessageStatus.model_validate(
            {
                "id": "wamid.out",
                "status": "failed",
                "recipient_id": 5511999990000,
                "errors": [{"code": 131047, "title": "Re-engagement message"}],
            }
        )

        assert status.is_failed
        assert status.recipient_id == "5511999990000"
        assert status.errors[0].code == 131047

    def test_error_record_str_mentions_code(self):
        error = ErrorRecord(code=130429, title="Rate limit hit")

        assert "130429" in str(error)


class TestBusinessEvents:
    def test_template_status_update(self):
        value = Value.model_validate(
            {
                "event": "REJECTED",
                "message_template_id": 594425479261596,
                "message_template_name": "order_update",
                "message_template_language": "en_US",
                "reason": "INCORRECT_CATEGORY",
            }
        )

        event = value.business_event("message_template_status_update")

        assert isinstance(event, TemplateStatusUpdate)
        assert event.event == "REJECTED"
        assert event.message_template_id == "594425479261596"

    def test_account_update_with_ban(self):
        value = Value.model_validate(
            {
                "phone_number": "15550783881",
                "event": "DISABLED_UPDATE",
                "ban_info": {"waba_ban_state": ["SCHEDULE_FOR_DISABLE"], "waba_ban_date": "2026-11-01"},
            }
        )

        event = value.business_event("account_update")

        assert isinstance(event, AccountUpdate)
        assert event.ban_info.waba_ban_state == ["SCHEDULE_FOR_DISABLE"]

    def test_account_settings_update_reads_nested_object(self):
        value = Value.model_validate(
            {
                "phone_number_settings": {
                    "phone_number_id": 106540352242922,
                    "calling": {"status": "ENABLED", "call_icon_visibility": "DEFAULT"},
                }
            }
        )

        event = value.business_event("account_settings_update")

        assert isinstance(event, PhoneNumberSettings)
        assert event.phone_number_id == "106540352242922"
        assert event.calling.status == "ENABLED"

    @pytest.mark.parametrize("raw", [{}, {"phone_number_settings": None}])
    def test_account_settings_update_without_nested_object(self, raw):
        event = Value.model_validate(raw).business_event("account_settings_update")

        assert event == PhoneNumberSettings()

    def test_flow_event_keeps_its_errors(self):
        value = Value.model_validate(
            {
                "event": "ENDPOINT_ERROR_RATE",
                "flow_id": "8810",
                "error_rate": 12.5,
                "errors": [{"error_type": "TIMEOUT_ERROR", "error_rate": 10.0, "error_count": 4}],
            }
        )

        event = value.business_event("flows")

        assert isinstance(event, FlowEvent)
        assert event.flow_id == "8810"
        assert event.errors[0].error_type == "TIMEOUT_ERROR"

    def test_non_business_field(self):
        assert Value().business_event("messages") is None

    def test_wrong_shape_raises(self):
        value = Value.model_validate({"event": "DISABLED_UPDATE", "ban_info": "not an object"})

        with pytest.raises(ValidationError):
            value.business_event("account_update")
