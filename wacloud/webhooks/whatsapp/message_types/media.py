"""
WhatsApp media message schema.

Audio, video, image, document and sticker messages share one payload shape;
only a handful of fields are specific to a kind (``filename`` for documents,
``voice`` for audio, ``animated`` for stickers, ``caption`` for visual media).
"""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import WireModel


class MediaInfo(WireModel):
    """Reference to a media object uploaded by the customer."""

    id: str = Field(default="", description="Media ID used to download the file")
    mime_type: str = ""
    sha256: str = ""
    caption: str = ""
    filename: str = ""
    url: str = ""
    animated: bool | None = None
    voice: bool | None = None
