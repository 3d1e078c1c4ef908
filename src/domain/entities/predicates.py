"""
Typed query predicates.

Listing queries are composed from these values and translated to the
store's native query language only at the repository boundary.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import Field

from src.utils.model_utils import BaseModel


class ComparisonOperator(str, Enum):
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"


class ArchivedFlag(BaseModel):
    kind: Literal["archived"] = "archived"
    archived: bool = False


class Equals(BaseModel):
    kind: Literal["equals"] = "equals"
    field: str
    value: Any


class Contains(BaseModel):
    """Case-insensitive literal substring match against a text field."""

    kind: Literal["contains"] = "contains"
    field: str
    value: str


class Compare(BaseModel):
    kind: Literal["compare"] = "compare"
    field: str
    operator: ComparisonOperator
    value: Any


Predicate = Annotated[
    ArchivedFlag | Equals | Contains | Compare, Field(discriminator="kind")
]


class And(BaseModel):
    kind: Literal["and"] = "and"
    predicates: list[Predicate] = Field(default_factory=list)

    def extend(self, *predicates: Predicate | None) -> "And":
        """Returns a new conjunction with the non-null predicates appended."""
        return And(
            predicates=[*self.predicates, *(p for p in predicates if p is not None)]
        )
