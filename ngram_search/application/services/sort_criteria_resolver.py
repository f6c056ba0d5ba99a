"""Resolves the effective sort of a search request.

Relevance ordering is requested through the pseudo-field _searchRank. It is
always descending and never mixed with real-field ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ngram_search.application.services.search_predicate_builder import (
    ensure_no_injection_markers,
)
from ngram_search.core.constants import (
    DEFAULT_SORT_FIELD,
    FULL_TEXT_SEARCH_DATA_COLUMN,
    SEARCH_RANK_PSEUDOFIELD,
)
from ngram_search.domain.value_objects import PaginationRequest, SortOrder
from ngram_search.shared.utils.sanitization import SqlSanitizer

if TYPE_CHECKING:
    from ngram_search.infrastructure.persistence.dialects import SqlDialect


@dataclass(frozen=True)
class ResolvedSort:
    """Effective pagination plus the rank expression to order by (DESC), if any."""

    pagination: PaginationRequest
    order_by: str | None = None

    @property
    def by_rank(self) -> bool:
        return self.order_by is not None


def _sorts_by_real_field(pagination: PaginationRequest) -> bool:
    return pagination.is_sorted and pagination.order_for(SEARCH_RANK_PSEUDOFIELD) is None


def init_sort_criteria(
    phrase: str | None,
    pagination: PaginationRequest,
    default_sort_field: str = DEFAULT_SORT_FIELD,
) -> PaginationRequest:
    """Fill in the sort when the caller gave none or asked for relevance.

    - caller sorts by real fields: returned unchanged;
    - non-blank phrase: _searchRank DESC (even if ASC was requested);
    - blank phrase: default_sort_field DESC (newest first).
    """
    if _sorts_by_real_field(pagination):
        return pagination
    has_phrase = phrase is not None and bool(phrase.strip())
    sort_field = SEARCH_RANK_PSEUDOFIELD if has_phrase else default_sort_field
    return pagination.with_sort(SortOrder.desc(sort_field))


class SortCriteriaResolver:
    """Decides between caller ordering, relevance ordering and the default ordering."""

    def __init__(
        self,
        dialect: SqlDialect,
        default_sort_field: str = DEFAULT_SORT_FIELD,
        column: str = FULL_TEXT_SEARCH_DATA_COLUMN,
    ) -> None:
        self.dialect = dialect
        self.default_sort_field = default_sort_field
        self.column = SqlSanitizer.validate_column_name(column)

    def resolve(self, search_query: str | None, pagination: PaginationRequest) -> ResolvedSort:
        """Return the effective pagination and, for relevance sort, the rank fragment.

        search_query is the lenient n-gram query from
        SearchPredicateBuilder.build_search_query, or None/blank when there is
        no full-text search. Page, size and unpagedness are carried over.

        Raises:
            InvalidInputException: If search_query contains injection markers.
        """
        effective = init_sort_criteria(search_query, pagination, self.default_sort_field)
        if effective.order_for(SEARCH_RANK_PSEUDOFIELD) is None:
            return ResolvedSort(effective)

        ensure_no_injection_markers((search_query,))
        order_by = self.dialect.full_text_search_rank_template.format(
            column=self.column, query=search_query
        )
        return ResolvedSort(effective, order_by)
