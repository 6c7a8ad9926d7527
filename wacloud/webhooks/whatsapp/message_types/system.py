"""
WhatsApp system message schema.

System messages report changes on the customer side, such as a new phone
number (``user_changed_number``) or a new security identity.
"""

from wacloud.webhooks.whatsapp.base_models import WireModel


class System(WireModel):
    body: str = ""
    identity: str = ""
    new_wa_id: str = ""
    wa_id: str = ""
    type: str = ""
    customer: str = ""


class Identity(WireModel):
    """Security identity change of a customer (the key hash changed)."""

    acknowledged: bool = False
    created_timestamp: str = ""
    hash: str = ""
