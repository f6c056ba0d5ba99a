"""Repository for models searchable by n-grams (fuzzy full-text search).

Writes run the SearchDataAssembler stage; reads combine caller filters with
the lenient n-gram predicate and order by search rank when relevance sort is
in effect.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import ColumnElement, func, inspect as sa_inspect, literal_column, select

from ngram_search.application.dtos.search import Page
from ngram_search.application.services.ngram_config_cache import (
    NgramConfigCache,
    ngram_config_cache,
)
from ngram_search.application.services.search_data_assembler import SearchDataAssembler
from ngram_search.application.services.search_predicate_builder import (
    SearchPredicateBuilder,
    as_clause,
)
from ngram_search.application.services.sort_criteria_resolver import (
    ResolvedSort,
    SortCriteriaResolver,
    init_sort_criteria,
)
from ngram_search.core.constants import DEFAULT_SORT_FIELD
from ngram_search.domain.exceptions import ConfigurationException, InvalidInputException
from ngram_search.domain.value_objects import PaginationRequest
from ngram_search.infrastructure.persistence.database import Base
from ngram_search.infrastructure.persistence.models.mixins import FullTextSearchMixin
from ngram_search.infrastructure.persistence.repositories.base import BaseRepository
from ngram_search.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy import TextClause
    from sqlalchemy.ext.asyncio import AsyncSession

    from ngram_search.infrastructure.persistence.dialects import SqlDialect

ModelType = TypeVar("ModelType", bound=Base)
V = TypeVar("V")
_logger = get_logger(__name__)


class SearchableRepository(BaseRepository[ModelType]):
    """Repository with n-gram indexing on write and filter + full-text search on read.

    The dialect is passed in explicitly. Full-text search requires the model
    to use FullTextSearchMixin; plain filtering works for any model.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        dialect: SqlDialect,
        *,
        assembler: SearchDataAssembler | None = None,
        config_cache: NgramConfigCache | None = None,
        default_sort_field: str = DEFAULT_SORT_FIELD,
    ) -> None:
        super().__init__(db, model)
        self.dialect = dialect
        self.config_cache = config_cache if config_cache is not None else ngram_config_cache
        self.assembler = assembler or SearchDataAssembler(config_cache=self.config_cache)
        self.predicate_builder = SearchPredicateBuilder(dialect, self.assembler.ngram_service)
        self.sort_resolver = SortCriteriaResolver(dialect, default_sort_field)

    @property
    def is_searchable(self) -> bool:
        return issubclass(self.model, FullTextSearchMixin)

    async def _on_before_write(self, obj: ModelType) -> None:
        await super()._on_before_write(obj)
        if isinstance(obj, FullTextSearchMixin):
            self.assembler.before_write(obj)

    async def find_by_filter(
        self,
        conditions: Iterable[Any] = (),
        phrase: str | None = None,
        pagination: PaginationRequest | None = None,
    ) -> Page[ModelType]:
        """Return one page of records matching all conditions and, if given, the phrase.

        The phrase matches fuzzily: a record matches if it shares at least one
        n-gram with it. Words shorter than the model's min n-gram length are
        not searchable; a phrase made only of such words matches nothing. The
        returned page carries the pagination actually applied (sort rewritten
        to _searchRank DESC or to the default sort).

        Raises:
            ConfigurationException: If a phrase is given for a non-searchable model.
            InvalidInputException: If the phrase cannot be searched safely or a
                sort field is not a column of the model.
        """
        pagination = pagination or PaginationRequest()
        predicates = list(conditions)
        _logger.info(
            "Finding [%s]: %d condition(s) / full-text search %s / pagination %s",
            self.model.__name__,
            len(predicates),
            "on" if phrase and phrase.strip() else "off",
            pagination,
        )

        search_query: str | None = None
        if phrase is not None and phrase.strip():
            search_query = self._build_search_query(phrase)
            if not search_query:
                _logger.debug("No searchable words in phrase for [%s]", self.model.__name__)
                return Page(
                    pagination=init_sort_criteria(
                        phrase, pagination, self.sort_resolver.default_sort_field
                    )
                )
            predicates.append(
                as_clause(self.predicate_builder.build_condition_for_query(search_query))
            )

        resolved = self.sort_resolver.resolve(search_query, pagination)
        stmt = select(self.model).where(*predicates).order_by(*self._order_by(resolved))
        if resolved.pagination.is_paged:
            stmt = stmt.offset(resolved.pagination.offset).limit(resolved.pagination.size)

        result = await self.db.execute(stmt)
        items = list(result.scalars().all())

        count_stmt = select(func.count()).select_from(self.model).where(*predicates)
        total = (await self.db.execute(count_stmt)).scalar_one()
        return Page(items=items, total=total, pagination=resolved.pagination)

    def json_contains(self, property_name: str, value: Any) -> TextClause:
        """Condition matching rows whose JSON column property_name contains value."""
        return as_clause(self.predicate_builder.build_json_contains_condition(property_name, value))

    @staticmethod
    def and_if_not_none(
        value: V | None,
        conditions: list[Any],
        condition: Callable[[V], Any],
    ) -> None:
        """Append condition(value) to conditions unless value is None."""
        if value is not None:
            conditions.append(condition(value))

    @staticmethod
    def and_if_not_blank(
        value: str | None,
        conditions: list[Any],
        condition: Callable[[str], Any],
    ) -> None:
        """Append condition(value) to conditions unless value is None or blank."""
        if value is not None and value.strip():
            conditions.append(condition(value))

    def _build_search_query(self, phrase: str) -> str:
        if not self.is_searchable:
            raise ConfigurationException(
                f"{self.model.__name__} must use {FullTextSearchMixin.__name__} "
                "to support full-text search",
                self.model,
            )
        config = self.config_cache.get(self.model)
        return self.predicate_builder.build_search_query(phrase, config)

    def _order_by(self, resolved: ResolvedSort) -> list[ColumnElement[Any]]:
        if resolved.order_by is not None:
            # rank is always descending
            return [literal_column(resolved.order_by).desc()]
        columns = sa_inspect(self.model).columns
        clauses: list[ColumnElement[Any]] = []
        for order in resolved.pagination.sort:
            if order.field not in columns:
                raise InvalidInputException(
                    f"Cannot sort {self.model.__name__} by '{order.field}'", field="sort"
                )
            column = columns[order.field]
            clauses.append(column.desc() if order.is_descending else column.asc())
        return clauses
