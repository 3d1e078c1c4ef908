from datetime import datetime

from pydantic import Field

from src.api.schemas.pagination import Connection
from src.utils.model_utils import CamelModel


class UnitConversion(CamelModel):
    measurement_unit: str
    factor: float = Field(..., gt=0)


class CreateProductRequest(CamelModel):
    description: str = Field(..., min_length=1)
    default_measurement_unit: str = Field(..., min_length=1)
    conversions: list[UnitConversion]


class UpdateProductRequest(CamelModel):
    description: str | None = None
    default_measurement_unit: str | None = None
    conversions: list[UnitConversion] | None = None


class Product(CamelModel):
    id: str = Field(..., description="The product's unique id")
    description: str
    default_measurement_unit: str
    conversions: list[UnitConversion]
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductConnection(Connection[Product]):
    pass
