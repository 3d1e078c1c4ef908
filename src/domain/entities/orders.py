from datetime import datetime

from pydantic import Field

from src.utils.model_utils import BaseModel


class OrderItemEntity(BaseModel):
    item: str = Field(..., description="The id of the ordered product")
    quantity: float = Field(..., description="The ordered amount")
    measurement_unit: str | None = Field(
        None, description="The unit the quantity is expressed in"
    )


class OrderEntity(BaseModel):
    """
    A client order, grouped into a numbered batch.

    The MongoDB ObjectId behind `id` doubles as the ordering key of the
    order listing.
    """

    id: str | None = Field(None, description="The order's unique id")
    client: str = Field(..., description="The client the order is delivered to")
    batch: int = Field(..., description="The number of the batch the order belongs to")
    deliver_at: datetime = Field(..., description="When the order must be delivered")
    items: list[OrderItemEntity] = Field(default_factory=list)
    archived: bool = Field(False, description="Archived orders are hidden from listings")
    created_at: datetime | None = Field(
        None, description="The timestamp when the order was created"
    )
    updated_at: datetime | None = Field(
        None, description="The timestamp when the order was last updated"
    )
