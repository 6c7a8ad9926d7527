"""
WhatsApp text message schema.

Plain text, product enquiries (text sent from a catalog product) and
Click-to-WhatsApp referrals all arrive with ``type == "text"``; the classifier
tells them apart from the surrounding message fields.
"""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import Referral, WireModel


class TextContent(WireModel):
    """Text message content."""

    body: str = Field(default="", description="The text content of the message")


class ReferralNotification(WireModel):
    """Text written by a customer arriving from an ad, bundled with the ad referral."""

    text: TextContent = Field(default_factory=TextContent)
    referral: Referral = Field(default_factory=Referral)
