"""WhatsApp Cloud API webhook schemas."""

from .base_models import (
    Contact,
    ContactProfile,
    Conversation,
    ErrorRecord,
    MessageContext,
    Metadata,
    Pricing,
    Referral,
    ReferredProduct,
    WireModel,
)
from .business_models import (
    AccountAlert,
    AccountReviewUpdate,
    AccountUpdate,
    CapabilityUpdate,
    FlowEvent,
    PhoneNumberNameUpdate,
    PhoneNumberQualityUpdate,
    PhoneNumberSettings,
    TemplateCategoryUpdate,
    TemplateQualityUpdate,
    TemplateStatusUpdate,
    UserPreference,
)
from .message import WhatsAppMessage
from .status_models import WhatsAppMessageStatus
from .webhook_container import Change, Entry, Notification, Value

__all__ = [
    "AccountAlert",
    "AccountReviewUpdate",
    "AccountUpdate",
    "CapabilityUpdate",
    "Change",
    "Contact",
    "ContactProfile",
    "Conversation",
    "Entry",
    "ErrorRecord",
    "FlowEvent",
    "MessageContext",
    "Metadata",
    "Notification",
    "PhoneNumberNameUpdate",
    "PhoneNumberQualityUpdate",
    "PhoneNumberSettings",
    "Pricing",
    "Referral",
    "ReferredProduct",
    "TemplateCategoryUpdate",
    "TemplateQualityUpdate",
    "TemplateStatusUpdate",
    "UserPreference",
    "Value",
    "WhatsAppMessage",
    "WhatsAppMessageStatus",
    "WireModel",
]
