from typing import Generic, TypeVar

from pydantic import Field

from src.utils.model_utils import CamelModel

T = TypeVar("T")


class PageInfo(CamelModel):
    start_cursor: str | None = Field(
        None, description="Cursor of the first edge, null when the page is empty"
    )
    end_cursor: str | None = Field(
        None,
        description="Cursor of the last edge. Pass it back as `afterCursor` to get the next page.",
    )
    has_next_page: bool = Field(..., description="Whether more records follow")


class Edge(CamelModel, Generic[T]):
    cursor: str = Field(..., description="Opaque cursor pointing at this node")
    node: T


class Connection(CamelModel, Generic[T]):
    """A page of a cursor-paginated listing."""

    page_info: PageInfo
    edges: list[Edge[T]]
    total_count: int = Field(
        ..., description="Number of records matching the search, across all pages"
    )


class CreatedResponse(CamelModel):
    id: str = Field(..., description="The id of the created record")
