from dataclasses import dataclass, replace
from typing import TypeVar

from src.adapters.crud_store.port import RecordStore
from src.domain.entities.pagination import Page, SortDirection
from src.domain.services.filter_builder import (
    SearchStrategy,
    batch_number_search,
    build_cursor_filter,
    build_page_filter,
    build_search_filter,
    description_search,
)
from src.domain.services.page_executor import PageExecutor
from src.utils.pagination import decode_cursor

T = TypeVar("T")


@dataclass(frozen=True)
class ListingConfig:
    """How one record type is listed: page size, key order and search semantics."""

    page_size: int
    sort_direction: SortDirection
    search_strategy: SearchStrategy

    def with_page_size(self, page_size: int) -> "ListingConfig":
        return replace(self, page_size=page_size)


# Orders are grouped by batch and listed newest first
ORDERS_LISTING = ListingConfig(
    page_size=30,
    sort_direction=SortDirection.DESC,
    search_strategy=batch_number_search,
)

# The catalog is listed in insertion order
PRODUCTS_LISTING = ListingConfig(
    page_size=29,
    sort_direction=SortDirection.ASC,
    search_strategy=description_search,
)


async def paginate(
    store: RecordStore[T],
    config: ListingConfig,
    search: str | None = None,
    after_cursor: str | None = None,
) -> Page[T]:
    """
    List one page of unarchived records.

    An absent or empty `after_cursor` returns the first page; any other value
    must decode to an ordering key.

    Raises:
        InvalidCursor: If `after_cursor` is non-empty and malformed
        StoreQueryFailed: If the record store cannot be queried
    """
    after_key = decode_cursor(after_cursor) if after_cursor else None

    search_filter = build_search_filter(search, config.search_strategy)
    cursor_filter = build_cursor_filter(after_key, config.sort_direction)

    return await PageExecutor(store).execute(
        page_filter=build_page_filter(search_filter, cursor_filter),
        count_filter=search_filter,
        sort_direction=config.sort_direction,
        page_size=config.page_size,
    )
