from datetime import datetime

from pydantic import Field

from src.utils.model_utils import BaseModel


class BatchEntity(BaseModel):
    id: int | None = Field(None, description="The batch number, also its document id")
    orders: list[str] = Field(
        default_factory=list, description="Ids of the orders grouped in this batch"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None
