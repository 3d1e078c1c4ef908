"""
Composition of listing predicates.

Every listing query is the AND of three parts:
    archived == False
    AND <entity search predicate>   (only when a search term yields one)
    AND <cursor predicate>          (only when a cursor was supplied)

The total count of a listing uses the first two parts only.
"""

import re
from collections.abc import Callable

from bson import ObjectId

from src.domain.entities.pagination import SortDirection
from src.domain.entities.predicates import (
    And,
    ArchivedFlag,
    Compare,
    ComparisonOperator,
    Contains,
    Equals,
    Predicate,
)

ORDERING_KEY_FIELD = "id"

SearchStrategy = Callable[[str], Predicate | None]

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def batch_number_search(term: str) -> Predicate | None:
    """
    Numeric equality on the order's batch.

    Reads a leading integer from the term ("12", " 12abc"); a term without
    one, or one that reads as zero, does not filter.
    """
    match = _LEADING_INTEGER.match(term)
    if match is None:
        return None
    batch_number = int(match.group(1))
    if batch_number == 0:
        return None
    return Equals(field="batch", value=batch_number)


def description_search(term: str) -> Predicate | None:
    """Case-insensitive substring match on the product description."""
    return Contains(field="description", value=term)


def build_search_filter(
    search: str | None, search_strategy: SearchStrategy
) -> And:
    search_filter = And(predicates=[ArchivedFlag(archived=False)])
    if search:
        return search_filter.extend(search_strategy(search))
    return search_filter


def build_cursor_filter(
    after_key: ObjectId | None, sort_direction: SortDirection
) -> Compare | None:
    """
    Positional constraint strictly past the cursor key, in the direction the
    listing is sorted. No cursor means the first page.
    """
    if after_key is None:
        return None
    operator = (
        ComparisonOperator.LT
        if sort_direction == SortDirection.DESC
        else ComparisonOperator.GT
    )
    return Compare(field=ORDERING_KEY_FIELD, operator=operator, value=after_key)


def build_page_filter(search_filter: And, cursor_filter: Compare | None) -> And:
    return search_filter.extend(cursor_filter)
