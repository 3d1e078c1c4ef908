from datetime import datetime

from pydantic import Field

from src.utils.model_utils import BaseModel


class UnitConversionEntity(BaseModel):
    measurement_unit: str = Field(..., description="The unit converted to")
    factor: float = Field(
        ..., description="How many of this unit make one default unit"
    )


class ProductEntity(BaseModel):
    id: str | None = Field(None, description="The product's unique id")
    description: str = Field(..., description="Human readable product name")
    default_measurement_unit: str = Field(
        ..., description="The unit quantities of this product default to"
    )
    conversions: list[UnitConversionEntity] = Field(default_factory=list)
    archived: bool = Field(
        False, description="Archived products are hidden from listings"
    )
    created_at: datetime | None = Field(
        None, description="The timestamp when the product was created"
    )
    updated_at: datetime | None = Field(
        None, description="The timestamp when the product was last updated"
    )
