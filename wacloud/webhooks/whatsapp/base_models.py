"""
Base models for WhatsApp Business Platform webhooks.

This module contains the lenient base model shared by every wire schema and
the records that appear across message types: business metadata, contacts,
reply context, ad referrals, error records and conversation pricing.

Every field carries a default so that a missing substructure decodes to an
empty value instead of failing the whole notification.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WireModel(BaseModel):
    """
    Lenient base for inbound webhook records.

    Unknown keys are ignored, JSON ``null`` falls back to the field default and
    numbers are accepted for string fields (the Cloud API is not consistent
    about quoting ids and timestamps).
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """Treat explicit nulls as absent keys."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Metadata(WireModel):
    """Business phone number that received or sent the message."""

    display_phone_number: str = Field(
        default="", description="Business display phone number"
    )
    phone_number_id: str = Field(
        default="", description="Business phone number ID (Cloud API identifier)"
    )


class ContactProfile(WireModel):
    """User profile information from a WhatsApp contact."""

    name: str = Field(default="", description="WhatsApp user's display name")


class Contact(WireModel):
    """
    Sender of an inbound message.

    ``user_id`` is the business scoped user id; ``wa_id`` the phone number,
    which may be empty for username-only users.
    """

    wa_id: str = Field(default="", description="WhatsApp user ID/phone number")
    user_id: str = Field(default="", description="Business scoped user ID")
    profile: ContactProfile = Field(default_factory=ContactProfile)

    @property
    def effective_id(self) -> str:
        """Best available identifier: the scoped user id, else the phone number."""
        return self.user_id or self.wa_id


class ReferredProduct(WireModel):
    """Product a customer asked about from a catalog message."""

    catalog_id: str = ""
    product_retailer_id: str = ""


class MessageContext(WireModel):
    """
    Reply/forward context attached to a message.

    Present when the customer replied to a business message, forwarded a
    message, or sent an enquiry from a catalog product.
    """

    forwarded: bool = False
    frequently_forwarded: bool = False
    from_: str = Field(default="", alias="from", description="Sender of the quoted message")
    id: str = Field(default="", description="ID of the quoted message")
    type: str = ""
    referred_product: ReferredProduct | None = None


class Referral(WireModel):
    """Click-to-WhatsApp ad or post that led the customer to write."""

    source_url: str = ""
    source_id: str = ""
    source_type: str = ""
    headline: str = ""
    body: str = ""
    media_type: str = ""
    image_url: str = ""
    video_url: str = ""
    thumbnail_url: str = ""
    ctwa_clid: str = ""


class ErrorData(WireModel):
    details: str = ""
    messaging_product: str = ""


class ErrorRecord(WireModel):
    """
    Error reported by the platform.

    Appears at the value level (envelope errors), on failed statuses, on
    ``unknown``/``unsupported`` messages and inside flow alerts, which add the
    ``error_type``/``error_rate``/``error_count`` fields.
    """

    code: int = 0
    title: str = ""
    message: str = ""
    type: str = ""
    error_subcode: int = 0
    error_user_title: str = ""
    error_user_msg: str = ""
    fbtrace_id: str = ""
    href: str = ""
    error_data: ErrorData | None = None
    error_type: str = ""
    error_rate: float = 0.0
    error_count: int = 0

    def __str__(self) -> str:
        return f"[{self.code}] {self.title or self.message}"


class ConversationOrigin(WireModel):
    type: str = ""


class Conversation(WireModel):
    """Conversation a status update is billed against."""

    id: str = ""
    origin: ConversationOrigin = Field(default_factory=ConversationOrigin)
    expiration_timestamp: str = ""


class Pricing(WireModel):
    billable: bool = False
    category: str = ""
    pricing_model: str = ""
