"""
WhatsApp contacts message schema.

A contacts message carries one or more vCard-like cards shared by the customer.
"""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import WireModel


class ContactName(WireModel):
    formatted_name: str = ""
    first_name: str = ""
    last_name: str = ""
    middle_name: str = ""
    suffix: str = ""
    prefix: str = ""


class ContactPhone(WireModel):
    phone: str = ""
    wa_id: str = ""
    type: str = ""


class ContactEmail(WireModel):
    email: str = ""
    type: str = ""


class ContactAddress(WireModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    country_code: str = ""
    type: str = ""


class ContactOrganization(WireModel):
    company: str = ""
    department: str = ""
    title: str = ""


class ContactUrl(WireModel):
    url: str = ""
    type: str = ""


class ContactCard(WireModel):
    """One shared contact card."""

    name: ContactName = Field(default_factory=ContactName)
    phones: list[ContactPhone] = Field(default_factory=list)
    emails: list[ContactEmail] = Field(default_factory=list)
    addresses: list[ContactAddress] = Field(default_factory=list)
    org: ContactOrganization | None = None
    urls: list[ContactUrl] = Field(default_factory=list)
    birthday: str = ""
