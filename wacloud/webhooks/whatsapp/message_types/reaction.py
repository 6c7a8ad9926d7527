"""WhatsApp reaction message schema."""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import WireModel


class Reaction(WireModel):
    """
    Emoji reaction to a previously sent message.

    An empty ``emoji`` means the customer removed their reaction.
    """

    message_id: str = Field(default="", description="ID of the message reacted to")
    emoji: str = ""

    @property
    def is_removal(self) -> bool:
        return not self.emoji
