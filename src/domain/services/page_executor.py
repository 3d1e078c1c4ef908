import asyncio
from typing import Generic, TypeVar

from src.adapters.crud_store.port import RecordStore
from src.domain.entities.pagination import Edge, Page, PageInfo, SortDirection
from src.domain.entities.predicates import And
from src.domain.services.filter_builder import ORDERING_KEY_FIELD
from src.utils.logging import make_logger
from src.utils.pagination import encode_cursor

logger = make_logger(__name__)

T = TypeVar("T")


class PageExecutor(Generic[T]):
    """
    Runs a composed listing query against a record store and shapes the
    result into a page.
    """

    def __init__(self, store: RecordStore[T]):
        self.store = store

    async def execute(
        self,
        page_filter: And,
        count_filter: And,
        sort_direction: SortDirection,
        page_size: int,
    ) -> Page[T]:
        """
        Fetch one page of records past the cursor encoded in `page_filter`.

        Args:
            page_filter: Search predicates plus the cursor predicate
            count_filter: Search predicates only, used for the total count
            sort_direction: Direction of the ordering key
            page_size: Maximum number of edges in the page

        Returns:
            The page, with edges in store order

        Raises:
            StoreQueryFailed: If either the page query or the count query fails
        """
        # One extra record tells whether another page follows
        page_query = asyncio.ensure_future(
            self.store.find(
                page_filter,
                sort_key=ORDERING_KEY_FIELD,
                sort_direction=sort_direction,
                limit=page_size + 1,
            )
        )
        count_query = asyncio.ensure_future(self.store.count_where(count_filter))
        try:
            records, total_count = await asyncio.gather(page_query, count_query)
        except Exception:
            # A failed page has no partial result; stop the sibling query and
            # collect its outcome before re-raising
            for query in (page_query, count_query):
                query.cancel()
            await asyncio.gather(page_query, count_query, return_exceptions=True)
            raise

        has_next_page = len(records) > page_size
        if has_next_page:
            records = records[:page_size]

        edges = [
            Edge(cursor=encode_cursor(record.id), node=record) for record in records
        ]
        page_info = PageInfo(
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=edges[-1].cursor if edges else None,
            has_next_page=has_next_page,
        )
        return Page(edges=edges, page_info=page_info, total_count=total_count)
