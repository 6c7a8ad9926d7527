"""
Tests for message classification.

Covers the priority order of the rules, text and interactive
sub-classification, the payload fallback for untagged messages and purity.
"""

import pytest

from wacloud.core.events.classifier import MessageVariant, classify_message
from wacloud.core.events.errors import RecoverableError, UnsupportedMessageType
from wacloud.webhooks.whatsapp.message import WhatsAppMessage
from wacloud.webhooks.whatsapp.message_types import (
    ButtonReply,
    FlowReply,
    Interactive,
    ListReply,
    MediaInfo,
    Order,
    ReferralNotification,
    TextContent,
)

REFERRAL = {
    "source_url": "https://fb.me/3cr4Wqqkv",
    "source_id": "120226305854810726",
    "source_type": "ad",
    "headline": "Chat with us",
    "body": "Get 10% off",
    "media_type": "image",
    "ctwa_clid": "ARAkLkA8rmlFeiCktEJQ",
}
REFERRED_PRODUCT_CONTEXT = {
    "from": "15550783881",
    "id": "wamid.context",
    "referred_product": {"catalog_id": "194836987003835", "product_retailer_id": "di9ozbzfi4"},
}


@pytest.fixture
def message(build_message):
    def _message(*args, **kwargs) -> WhatsAppMessage:
        return WhatsAppMessage.model_validate(build_message(*args, **kwargs))

    return _message


class TestTextClassification:
    def test_plain_text(self, message):
        classified = classify_message(message("text", text={"body": "hi there"}))

        assert classified.variant is MessageVariant.TEXT
        assert classified.payload == TextContent(body="hi there")

    def test_referral_wins_over_reply_context(self, message):
        msg = message("text", referral=REFERRAL, context=REFERRED_PRODUCT_CONTEXT)

        classified = classify_message(msg)

        assert classified.variant is MessageVariant.REFERRAL
        assert isinstance(classified.payload, ReferralNotification)
        assert classified.payload.text.body == "hello"
        assert classified.payload.referral.ctwa_clid == "ARAkLkA8rmlFeiCktEJQ"

    def test_referred_product_is_product_enquiry(self, message):
        classified = classify_message(message("text", context=REFERRED_PRODUCT_CONTEXT))

        assert classified.variant is MessageVariant.PRODUCT_ENQUIRY
        assert classified.payload.body == "hello"

    def test_reply_context_without_product_is_plain_text(self, message):
        msg = message("text", context={"from": "15550783881", "id": "wamid.prev"})

        assert classify_message(msg).variant is MessageVariant.TEXT

    def test_missing_text_body_gives_empty_payload(self, build_message):
        raw = build_message("text")
        del raw["text"]

        classified = classify_message(WhatsAppMessage.model_validate(raw))

        assert classified.variant is MessageVariant.TEXT
        assert classified.payload == TextContent()


class TestMediaClassification:
    @pytest.mark.parametrize(
        ("tag", "variant"),
        [
            ("audio", MessageVariant.AUDIO),
            ("video", MessageVariant.VIDEO),
            ("image", MessageVariant.IMAGE),
            ("document", MessageVariant.DOCUMENT),
            ("sticker", MessageVariant.STICKER),
        ],
    )
    def test_media_kind(self, message, tag, variant):
        media = {"id": "1037543291543636", "mime_type": "application/octet-stream"}

        classified = classify_message(message(tag, **{tag: media}))

        assert classified.variant is variant
        assert classified.variant.is_media
        assert classified.payload.id == "1037543291543636"

    def test_document_keeps_filename_and_caption(self, message):
        doc = {"id": "1", "filename": "invoice.pdf", "caption": "March", "sha256": "abc"}

        payload = classify_message(message("document", document=doc)).payload

        assert payload.filename == "invoice.pdf"
        assert payload.caption == "March"

    def test_missing_media_slot_gives_empty_payload(self, message):
        assert classify_message(message("image")).payload == MediaInfo()


class TestInteractiveClassification:
    def test_list_reply(self, message):
        interactive = {
            "type": "list_reply",
            "list_reply": {"id": "row-1", "title": "Pizza", "description": "Large"},
        }

        classified = classify_message(message("interactive", interactive=interactive))

        assert classified.variant is MessageVariant.LIST_REPLY
        assert classified.payload == ListReply(id="row-1", title="Pizza", description="Large")

    def test_button_reply(self, message):
        interactive = {"type": "button_reply", "button_reply": {"id": "yes", "title": "Yes"}}

        classified = classify_message(message("interactive", interactive=interactive))

        assert classified.variant is MessageVariant.BUTTON_REPLY
        assert classified.payload == ButtonReply(id="yes", title="Yes")

    def test_flow_reply(self, message):
        interactive = {
            "type": "nfm_reply",
            "nfm_reply": {
                "name": "flow",
                "body": "Sent",
                "response_json": '{"flow_token": "abc", "rating": 5}',
            },
        }

        classified = classify_message(message("interactive", interactive=interactive))

        assert classified.variant is MessageVariant.FLOW_REPLY
        assert isinstance(classified.payload, FlowReply)
        assert classified.payload.response() == {"flow_token": "abc", "rating": 5}

    def test_other_interactive_type_is_generic(self, message):
        interactive = {"type": "call_permission_reply"}

        classified = classify_message(message("interactive", interactive=interactive))

        assert classified.variant is MessageVariant.INTERACTIVE
        assert classified.payload.type == "call_permission_reply"

    def test_missing_interactive_payload_is_generic(self, message):
        classified = classify_message(message("interactive"))

        assert classified.variant is MessageVariant.INTERACTIVE
        assert classified.payload == Interactive()

    def test_list_reply_tag_without_slot_gives_empty_reply(self, message):
        classified = classify_message(
            message("interactive", interactive={"type": "list_reply"})
        )

        assert classified.variant is MessageVariant.LIST_REPLY
        assert classified.payload == ListReply()


class TestOtherTags:
    def test_order(self, message):
        order = {
            "catalog_id": "194836987003835",
            "text": "please deliver",
            "product_items": [
                {"product_retailer_id": "sku-1", "quantity": 2, "item_price": 10.5, "currency": "USD"},
                {"product_retailer_id": "sku-2", "quantity": 1, "item_price": 4, "currency": "USD"},
            ],
        }

        classified = classify_message(message("order", order=order))

        assert classified.variant is MessageVariant.ORDER
        assert isinstance(classified.payload, Order)
        assert classified.payload.total == pytest.approx(25.0)

    def test_button(self, message):
        classified = classify_message(
            message("button", button={"payload": "STOP", "text": "Stop promotions"})
        )

        assert classified.variant is MessageVariant.BUTTON
        assert classified.payload.payload == "STOP"

    def test_system(self, message):
        system = {
            "body": "NAME changed from 5511 to 5512",
            "new_wa_id": "5512",
            "type": "user_changed_number",
        }

        classified = classify_message(message("system", system=system))

        assert classified.variant is MessageVariant.SYSTEM
        assert classified.payload.new_wa_id == "5512"

    def test_unknown_carries_errors(self, message):
        errors = [{"code": 131051, "title": "Message type unknown"}]

        classified = classify_message(message("unknown", errors=errors))

        assert classified.variant is MessageVariant.UNKNOWN
        assert [e.code for e in classified.payload] == [131051]

    def test_reaction(self, message):
        reaction = {"message_id": "wamid.original", "emoji": "\U0001f44d"}

        classified = classify_message(message("reaction", reaction=reaction))

        assert classified.variant is MessageVariant.REACTION
        assert classified.payload.emoji == "\U0001f44d"
        assert not classified.payload.is_removal

    def test_location(self, message):
        location = {"latitude": -23.55, "longitude": -46.63, "name": "Office"}

        classified = classify_message(message("location", location=location))

        assert classified.variant is MessageVariant.LOCATION
        assert classified.payload.latitude == pytest.approx(-23.55)

    def test_contacts(self, message):
        contacts = [
            {
                "name": {"formatted_name": "John Smith", "first_name": "John"},
                "phones": [{"phone": "+1 555 0100", "wa_id": "15550100", "type": "WORK"}],
            }
        ]

        classified = classify_message(message("contacts", contacts=contacts))

        assert classified.variant is MessageVariant.CONTACTS
        assert classified.payload[0].name.formatted_name == "John Smith"

    def test_unsupported(self, message):
        errors = [{"code": 131051, "title": "Message type is currently not supported."}]

        classified = classify_message(message("unsupported", errors=errors))

        assert classified.variant is MessageVariant.UNSUPPORTED
        assert classified.payload[0].code == 131051

    def test_request_welcome_passes_the_message(self, message):
        msg = message("request_welcome")

        classified = classify_message(msg)

        assert classified.variant is MessageVariant.REQUEST_WELCOME
        assert classified.payload is msg

    def test_tag_matching_ignores_case(self, message):
        assert classify_message(message(" ORDER ")).variant is MessageVariant.ORDER


class TestFallbackClassification:
    def test_untagged_contacts(self, message):
        msg = message(None, contacts=[{"name": {"formatted_name": "Ann"}}])

        assert classify_message(msg).variant is MessageVariant.CONTACTS

    def test_untagged_location(self, message):
        msg = message(None, location={"latitude": 1.0, "longitude": 2.0})

        assert classify_message(msg).variant is MessageVariant.LOCATION

    def test_untagged_identity_change(self, message):
        identity = {"acknowledged": True, "created_timestamp": "1700000000", "hash": "h1"}

        classified = classify_message(message(None, identity=identity))

        assert classified.variant is MessageVariant.CUSTOMER_IDENTITY_CHANGE
        assert classified.payload.hash == "h1"

    def test_unrecognized_tag_falls_back_to_payload(self, message):
        msg = message("video_note", location={"latitude": 1.0, "longitude": 2.0})

        assert classify_message(msg).variant is MessageVariant.LOCATION

    def test_contacts_win_over_location_in_fallback(self, message):
        msg = message(
            "",
            contacts=[{"name": {"formatted_name": "Ann"}}],
            location={"latitude": 1.0, "longitude": 2.0},
        )

        assert classify_message(msg).variant is MessageVariant.CONTACTS

    @pytest.mark.parametrize("tag", [None, "", "video_note"])
    def test_nothing_to_fall_back_on(self, message, tag):
        with pytest.raises(UnsupportedMessageType) as exc_info:
            classify_message(message(tag, message_id="wamid.nope"))

        assert exc_info.value.message_id == "wamid.nope"
        assert isinstance(exc_info.value, RecoverableError)

    def test_empty_contacts_list_does_not_match(self, message):
        with pytest.raises(UnsupportedMessageType):
            classify_message(message(None, contacts=[]))


class TestClassificationProperties:
    @pytest.mark.parametrize(
        "tag",
        [
            "text",
            "button",
            "document",
            "audio",
            "video",
            "image",
            "sticker",
            "interactive",
            "order",
            "system",
            "unknown",
            "location",
            "reaction",
            "contacts",
            "",
        ],
    )
    def test_every_tag_yields_a_variant_or_unsupported(self, message, tag):
        try:
            classified = classify_message(message(tag))
        except UnsupportedMessageType:
            assert tag == ""
        else:
            assert isinstance(classified.variant, MessageVariant)

    def test_classification_is_idempotent(self, message):
        msg = message("text", referral=REFERRAL)
        before = msg.model_dump()

        first = classify_message(msg)
        second = classify_message(msg)

        assert first == second
        assert msg.model_dump() == before
