import json

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def validate_to_json(cls, value):
        if isinstance(value, str):
            return json.loads(value)
        return value


class CamelModel(BaseModel):
    """
    Base class for API schemas. Python attributes stay snake_case while the
    JSON wire format uses camelCase (e.g. `deliver_at` <-> `deliverAt`).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
