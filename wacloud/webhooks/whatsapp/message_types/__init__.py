"""
WhatsApp message type schemas.

One module per payload family carried by an inbound message.
"""

from .button import Button
from .contact import (
    ContactAddress,
    ContactCard,
    ContactEmail,
    ContactName,
    ContactOrganization,
    ContactPhone,
    ContactUrl,
)
from .interactive import ButtonReply, FlowReply, Interactive, ListReply
from .location import Location
from .media import MediaInfo
from .order import Order, ProductItem
from .reaction import Reaction
from .system import Identity, System
from .text import ReferralNotification, TextContent

__all__ = [
    "Button",
    "ButtonReply",
    "ContactAddress",
    "ContactCard",
    "ContactEmail",
    "ContactName",
    "ContactOrganization",
    "ContactPhone",
    "ContactUrl",
    "FlowReply",
    "Identity",
    "Interactive",
    "ListReply",
    "Location",
    "MediaInfo",
    "Order",
    "ProductItem",
    "Reaction",
    "ReferralNotification",
    "System",
    "TextContent",
]
