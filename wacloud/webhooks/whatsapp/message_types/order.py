"""WhatsApp order message schema."""

from pydantic import Field

from wacloud.webhooks.whatsapp.base_models import WireModel


class ProductItem(WireModel):
    product_retailer_id: str = ""
    quantity: int = 0
    item_price: float = 0.0
    currency: str = ""


class Order(WireModel):
    """Cart sent by the customer from a catalog."""

    catalog_id: str = ""
    text: str = Field(default="", description="Note attached to the order")
    product_items: list[ProductItem] = Field(default_factory=list)

    @property
    def total(self) -> float:
        """Sum of quantity times price over every item."""
        return sum(item.quantity * item.item_price for item in self.product_items)
