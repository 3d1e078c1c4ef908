import pytest
from bson import ObjectId

from src.domain.entities.pagination import SortDirection
from src.domain.entities.predicates import (
    And,
    ArchivedFlag,
    Compare,
    ComparisonOperator,
    Contains,
    Equals,
)
from src.domain.services.filter_builder import (
    batch_number_search,
    build_cursor_filter,
    build_page_filter,
    build_search_filter,
    description_search,
)


@pytest.mark.unit
class TestSearchStrategies:
    @pytest.mark.parametrize(
        "term, expected",
        [
            ("12", 12),
            (" 7", 7),
            ("42abc", 42),
            ("-3", -3),
        ],
    )
    def test_batch_number_search_reads_leading_integer(self, term, expected):
        assert batch_number_search(term) == Equals(field="batch", value=expected)

    @pytest.mark.parametrize("term", ["abc", "", "0", "x12"])
    def test_batch_number_search_without_a_number_does_not_filter(self, term):
        assert batch_number_search(term) is None

    def test_description_search_is_a_substring_match(self):
        assert description_search("Flour") == Contains(
            field="description", value="Flour"
        )


@pytest.mark.unit
class TestBuildSearchFilter:
    def test_without_search_only_excludes_archived(self):
        search_filter = build_search_filter(None, batch_number_search)
        assert search_filter.predicates == [ArchivedFlag(archived=False)]

    def test_empty_search_only_excludes_archived(self):
        search_filter = build_search_filter("", description_search)
        assert search_filter.predicates == [ArchivedFlag(archived=False)]

    def test_search_predicate_is_anded_with_archived_flag(self):
        search_filter = build_search_filter("5", batch_number_search)
        assert search_filter.predicates == [
            ArchivedFlag(archived=False),
            Equals(field="batch", value=5),
        ]

    def test_strategy_returning_nothing_keeps_base_filter(self):
        search_filter = build_search_filter("not a number", batch_number_search)
        assert search_filter.predicates == [ArchivedFlag(archived=False)]


@pytest.mark.unit
class TestBuildCursorFilter:
    def test_no_cursor_means_first_page(self):
        assert build_cursor_filter(None, SortDirection.DESC) is None
        assert build_cursor_filter(None, SortDirection.ASC) is None

    def test_descending_listing_continues_below_the_cursor(self):
        key = ObjectId()
        assert build_cursor_filter(key, SortDirection.DESC) == Compare(
            field="id", operator=ComparisonOperator.LT, value=key
        )

    def test_ascending_listing_continues_above_the_cursor(self):
        key = ObjectId()
        assert build_cursor_filter(key, SortDirection.ASC) == Compare(
            field="id", operator=ComparisonOperator.GT, value=key
        )


@pytest.mark.unit
class TestBuildPageFilter:
    def test_cursor_predicate_is_appended_without_touching_search_filter(self):
        key = ObjectId()
        search_filter = build_search_filter("flour", description_search)
        cursor_filter = build_cursor_filter(key, SortDirection.ASC)

        page_filter = build_page_filter(search_filter, cursor_filter)

        assert page_filter.predicates == [*search_filter.predicates, cursor_filter]
        # the count filter stays free of the positional constraint
        assert len(search_filter.predicates) == 2

    def test_without_cursor_page_filter_equals_search_filter(self):
        search_filter = build_search_filter(None, description_search)
        assert build_page_filter(search_filter, None) == search_filter

    def test_and_extend_skips_missing_predicates(self):
        assert And().extend(None, None).predicates == []
