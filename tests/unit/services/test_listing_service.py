import pytest

from src.adapters.crud_store.exceptions import StoreQueryFailed
from src.domain.entities.pagination import SortDirection
from src.domain.exceptions import InvalidCursor
from src.domain.services.filter_builder import batch_number_search, description_search
from src.domain.services.listing_service import (
    ORDERS_LISTING,
    PRODUCTS_LISTING,
    ListingConfig,
    paginate,
)
from src.utils.pagination import decode_cursor, encode_cursor
from tests.fixtures.repositories import (
    insert_order_document,
    insert_product_document,
    ordering_key,
)


def keys_of(page) -> list[str]:
    return [edge.node.id for edge in page.edges]


@pytest.mark.unit
class TestListingConfigs:
    def test_orders_listing(self):
        assert ORDERS_LISTING.page_size == 30
        assert ORDERS_LISTING.sort_direction == SortDirection.DESC
        assert ORDERS_LISTING.search_strategy is batch_number_search

    def test_products_listing(self):
        assert PRODUCTS_LISTING.page_size == 29
        assert PRODUCTS_LISTING.sort_direction == SortDirection.ASC
        assert PRODUCTS_LISTING.search_strategy is description_search

    def test_with_page_size_leaves_original_untouched(self):
        smaller = ORDERS_LISTING.with_page_size(5)
        assert smaller.page_size == 5
        assert smaller.sort_direction == ORDERS_LISTING.sort_direction
        assert ORDERS_LISTING.page_size == 30


@pytest.mark.asyncio
@pytest.mark.unit
class TestPaginate:
    async def test_worked_example_descending(self, order_repository):
        for n in range(1, 6):
            insert_order_document(order_repository, n)
        config = ORDERS_LISTING.with_page_size(2)

        first = await paginate(order_repository, config)
        assert keys_of(first) == [str(ordering_key(5)), str(ordering_key(4))]
        assert first.page_info.end_cursor == encode_cursor(ordering_key(4))
        assert first.page_info.has_next_page is True
        assert first.total_count == 5

        second = await paginate(
            order_repository, config, after_cursor=encode_cursor(ordering_key(4))
        )
        assert keys_of(second) == [str(ordering_key(3)), str(ordering_key(2))]
        assert second.page_info.has_next_page is True
        assert second.total_count == 5

        third = await paginate(
            order_repository, config, after_cursor=encode_cursor(ordering_key(2))
        )
        assert keys_of(third) == [str(ordering_key(1))]
        assert third.page_info.has_next_page is False
        assert third.total_count == 5

    async def test_walk_visits_every_record_once_in_order(self, product_repository):
        expected = [
            insert_product_document(product_repository, n) for n in range(1, 12)
        ]
        insert_product_document(product_repository, 12, archived=True)
        config = PRODUCTS_LISTING.with_page_size(3)

        seen, cursor, pages = [], None, 0
        while True:
            page = await paginate(product_repository, config, after_cursor=cursor)
            pages += 1
            assert len(page.edges) <= 3
            assert page.total_count == 11
            seen.extend(keys_of(page))
            if not page.page_info.has_next_page:
                break
            cursor = page.page_info.end_cursor

        assert seen == expected
        assert pages == 4

    async def test_page_never_includes_the_cursor_record(self, order_repository):
        for n in range(1, 6):
            insert_order_document(order_repository, n)
        cursor = encode_cursor(ordering_key(3))

        page = await paginate(
            order_repository, ORDERS_LISTING.with_page_size(10), after_cursor=cursor
        )

        assert str(decode_cursor(cursor)) not in keys_of(page)
        assert keys_of(page) == [str(ordering_key(2)), str(ordering_key(1))]

    async def test_records_inserted_mid_walk_land_outside_traversed_range(
        self, order_repository
    ):
        for n in range(1, 5):
            insert_order_document(order_repository, n)
        config = ORDERS_LISTING.with_page_size(2)

        first = await paginate(order_repository, config)
        insert_order_document(order_repository, 10)
        second = await paginate(
            order_repository, config, after_cursor=first.page_info.end_cursor
        )

        assert keys_of(first) + keys_of(second) == [
            str(ordering_key(n)) for n in (4, 3, 2, 1)
        ]

    async def test_search_restricts_pages_and_count(self, order_repository):
        for n in range(1, 7):
            insert_order_document(order_repository, n, batch=2 if n % 2 else 3)
        config = ORDERS_LISTING.with_page_size(2)

        page = await paginate(order_repository, config, search="2")

        assert keys_of(page) == [str(ordering_key(5)), str(ordering_key(3))]
        assert page.page_info.has_next_page is True
        assert page.total_count == 3

    async def test_empty_cursor_returns_first_page(self, order_repository):
        for n in range(1, 4):
            insert_order_document(order_repository, n)

        page = await paginate(
            order_repository, ORDERS_LISTING.with_page_size(2), after_cursor=""
        )

        assert keys_of(page) == [str(ordering_key(3)), str(ordering_key(2))]

    async def test_malformed_cursor_is_rejected(self, order_repository):
        with pytest.raises(InvalidCursor):
            await paginate(
                order_repository, ORDERS_LISTING, after_cursor="not-a-valid-cursor"
            )

    async def test_store_failure_surfaces(self, order_repository, monkeypatch):
        def broken_find(*args, **kwargs):
            raise ConnectionError("server unreachable")

        monkeypatch.setattr(order_repository.collection, "find", broken_find)

        with pytest.raises(StoreQueryFailed):
            await paginate(order_repository, ORDERS_LISTING)

    async def test_custom_config(self, product_repository):
        for n in range(1, 4):
            insert_product_document(product_repository, n)
        config = ListingConfig(
            page_size=1,
            sort_direction=SortDirection.DESC,
            search_strategy=description_search,
        )

        page = await paginate(product_repository, config)

        assert keys_of(page) == [str(ordering_key(3))]
        assert page.page_info.has_next_page is True
