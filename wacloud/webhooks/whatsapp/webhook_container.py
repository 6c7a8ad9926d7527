"""
Top-level webhook container models for WhatsApp Business Platform.

Notification -> Entry -> Change -> Value. The ``Value`` of a ``messages``
change carries errors, statuses and messages; business account changes put
their own flat schema in the same object, kept as extra fields until a
handler asks for the typed event.
"""

from pydantic import ConfigDict, Field

from wacloud.webhooks.whatsapp.base_models import (
    Contact,
    ErrorRecord,
    Metadata,
    WireModel,
)
from wacloud.webhooks.whatsapp.business_models import (
    BUSINESS_EVENT_MODELS,
    UserPreference,
)
from wacloud.webhooks.whatsapp.message import WhatsAppMessage
from wacloud.webhooks.whatsapp.status_models import WhatsAppMessageStatus


class Value(WireModel):
    """
    Payload of a single change.

    Any combination of errors, statuses and messages may be present, all of
    them may be empty.
    """

    model_config = ConfigDict(extra="allow")

    messaging_product: str = ""
    metadata: Metadata = Field(default_factory=Metadata)
    contacts: list[Contact] = Field(default_factory=list)
    errors: list[ErrorRecord] = Field(default_factory=list)
    messages: list[WhatsAppMessage] = Field(default_factory=list)
    statuses: list[WhatsAppMessageStatus] = Field(default_factory=list)
    user_preferences: list[UserPreference] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.errors or self.statuses or self.messages or self.user_preferences)

    def business_event(self, field: str) -> WireModel | None:
        """
        Build the typed business account event for a change field.

        Args:
            field: The change ``field`` this value arrived under

        Returns:
            The event model, or None if ``field`` is not a business account field

        Raises:
            pydantic.ValidationError: If the event fields have the wrong shape
        """
        mapping = BUSINESS_EVENT_MODELS.get(field)
        if mapping is None:
            return None
        model, key = mapping
        data = self.model_dump(by_alias=True)
        if key is not None:
            data = data.get(key) or {}
        return model.model_validate(data)


class Change(WireModel):
    """One discrete event; ``field`` names its category."""

    field: str = Field(default="", description="messages, account_update, ...")
    value: Value = Field(default_factory=Value)


class Entry(WireModel):
    """Batch of changes for one WhatsApp Business Account."""

    id: str = Field(default="", description="WhatsApp Business Account ID")
    time: int = Field(default=0, description="Unix time the changes were emitted")
    changes: list[Change] = Field(default_factory=list)


class Notification(WireModel):
    """A decoded webhook request body."""

    object: str = Field(default="", description="whatsapp_business_account")
    entry: list[Entry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entry

    def iter_changes(self):
        """Yield ``(entry, change)`` pairs in wire order."""
        for entry in self.entry:
            for change in entry.changes:
                yield entry, change
