from enum import Enum
from typing import Generic, TypeVar

import pymongo
from pydantic import Field

from src.utils.model_utils import BaseModel

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def pymongo_direction(self) -> int:
        return pymongo.ASCENDING if self == SortDirection.ASC else pymongo.DESCENDING


class Edge(BaseModel, Generic[T]):
    cursor: str = Field(..., description="Opaque cursor pointing at this node")
    node: T = Field(..., description="The record at this position")


class PageInfo(BaseModel):
    start_cursor: str | None = Field(
        None, description="Cursor of the first edge, null when the page is empty"
    )
    end_cursor: str | None = Field(
        None, description="Cursor of the last edge, null when the page is empty"
    )
    has_next_page: bool = Field(
        False, description="Whether more records follow the last edge"
    )


class Page(BaseModel, Generic[T]):
    """
    One page of a cursor-paginated listing.

    `total_count` is the size of the filtered set, independent of the
    cursor the page was requested with.
    """

    edges: list[Edge[T]] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
    total_count: int = 0
