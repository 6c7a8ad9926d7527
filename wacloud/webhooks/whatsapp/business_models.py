"""
WhatsApp Business Account change schemas.

Changes whose ``field`` is not ``messages`` describe events on the business
account itself (template reviews, quality ratings, phone number names, flow
health alerts). Their value uses a flat schema disjoint from the messaging
one; ``Value.business_event`` builds the matching model below.
"""

from pydantic import AliasChoices, Field

from wacloud.webhooks.whatsapp.base_models import ErrorRecord, WireModel


class AccountAlert(WireModel):
    entity_type: str = ""
    entity_id: str = ""
    alert_severity: str = ""
    alert_status: str = ""
    alert_type: str = ""
    alert_description: str = ""


class TemplateDisableInfo(WireModel):
    disable_date: str = ""


class TemplateOtherInfo(WireModel):
    title: str = ""
    description: str = ""


class TemplateStatusUpdate(WireModel):
    """Review outcome or status change of a message template."""

    event: str = Field(default="", description="APPROVED, REJECTED, PAUSED, ...")
    message_template_id: str = ""
    message_template_name: str = ""
    message_template_language: str = ""
    reason: str = ""
    disable_info: TemplateDisableInfo | None = None
    other_info: TemplateOtherInfo | None = None


class TemplateCategoryUpdate(WireModel):
    message_template_id: str = ""
    message_template_name: str = ""
    message_template_language: str = ""
    previous_category: str = ""
    new_category: str = ""
    correct_category: str = ""


class TemplateQualityUpdate(WireModel):
    message_template_id: str = ""
    message_template_name: str = ""
    message_template_language: str = ""
    previous_quality_score: str = ""
    new_quality_score: str = ""


class PhoneNumberNameUpdate(WireModel):
    display_phone_number: str = ""
    decision: str = ""
    requested_verified_name: str = ""
    rejection_reason: str = ""


class PhoneNumberQualityUpdate(WireModel):
    display_phone_number: str = ""
    event: str = ""
    current_limit: str = ""


class AccountReviewUpdate(WireModel):
    decision: str = ""


class RestrictionInfo(WireModel):
    restriction_type: str = ""
    expiration: str = ""


class BanInfo(WireModel):
    waba_ban_state: list[str] = Field(default_factory=list)
    waba_ban_date: str = ""


class ViolationInfo(WireModel):
    violation_type: str = ""


class AccountUpdate(WireModel):
    """Account level event: verification, restriction, ban or policy violation."""

    phone_number: str = ""
    event: str = ""
    restriction_info: list[RestrictionInfo] = Field(default_factory=list)
    ban_info: BanInfo | None = None
    violation_info: ViolationInfo | None = None


class CapabilityUpdate(WireModel):
    max_daily_conversation_per_phone: int = 0
    max_phone_numbers_per_business: int = 0


class CallingSettings(WireModel):
    status: str = ""
    call_icon_visibility: str = ""


class PhoneNumberSettings(WireModel):
    """Settings changed on a business phone number (``account_settings_update``)."""

    phone_number_id: str = ""
    calling: CallingSettings | None = Field(
        default=None, validation_alias=AliasChoices("calling", "callings")
    )


class FlowEvent(WireModel):
    """
    Health or status alert about a published flow.

    Which of the metric fields are set depends on ``event``:
    FLOW_STATUS_CHANGE, CLIENT_ERROR_RATE, ENDPOINT_ERROR_RATE,
    ENDPOINT_LATENCY or ENDPOINT_AVAILABILITY.
    """

    event: str = ""
    message: str = ""
    flow_id: str = ""
    old_status: str = ""
    new_status: str = ""
    error_rate: float = 0.0
    threshold: int = 0
    alert_state: str = ""
    errors: list[ErrorRecord] = Field(default_factory=list)
    p50_latency: int = 0
    p90_latency: int = 0
    requests_count: int = 0
    availability: int = 0


class UserPreference(WireModel):
    """Marketing message preference changed by a customer."""

    wa_id: str = ""
    detail: str = ""
    category: str = ""
    value: str = Field(default="", description="stop or resume")
    timestamp: str = ""


# Change field -> (event model, key holding the event inside the value or None
# when the event fields sit directly on the value)
BUSINESS_EVENT_MODELS: dict[str, tuple[type[WireModel], str | None]] = {
    "flows": (FlowEvent, None),
    "account_alerts": (AccountAlert, None),
    "message_template_status_update": (TemplateStatusUpdate, None),
    "template_category_update": (TemplateCategoryUpdate, None),
    "message_template_quality_update": (TemplateQualityUpdate, None),
    "phone_number_name_update": (PhoneNumberNameUpdate, None),
    "phone_number_quality_update": (PhoneNumberQualityUpdate, None),
    "account_update": (AccountUpdate, None),
    "account_review_update": (AccountReviewUpdate, None),
    "business_capability_update": (CapabilityUpdate, None),
    "account_settings_update": (PhoneNumberSettings, "phone_number_settings"),
}
