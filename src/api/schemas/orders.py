from datetime import datetime

from pydantic import Field

from src.api.schemas.pagination import Connection
from src.utils.model_utils import CamelModel


class OrderItem(CamelModel):
    item: str = Field(..., description="The id of the ordered product")
    quantity: float = Field(..., description="The ordered amount")
    measurement_unit: str | None = Field(
        None, description="The unit the quantity is expressed in"
    )


class CreateOrderRequest(CamelModel):
    client: str = Field(..., min_length=1, title="The client the order is for")
    batch: int = Field(..., title="The number of the batch to add the order to")
    deliver_at: datetime = Field(..., title="When the order must be delivered")
    items: list[OrderItem] = Field(..., min_length=1, title="The ordered products")


class UpdateOrderRequest(CamelModel):
    client: str | None = None
    batch: int | None = None
    deliver_at: datetime | None = None
    items: list[OrderItem] | None = None


class Order(CamelModel):
    id: str = Field(..., description="The order's unique id")
    client: str
    batch: int
    deliver_at: datetime
    items: list[OrderItem]
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderConnection(Connection[Order]):
    pass
