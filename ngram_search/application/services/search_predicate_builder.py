"""Builds SQL fragments for n-gram full-text and JSON-containment search.

Fragments are plain SQL text with every value already embedded and escaped.
They must never carry bind placeholders: the query layer treats them as
finished SQL. Wrap them with as_clause() before handing them to SQLAlchemy.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlalchemy import TextClause, text

from ngram_search.application.services.ngram_service import NgramService
from ngram_search.core.constants import FULL_TEXT_SEARCH_DATA_COLUMN
from ngram_search.domain.exceptions import InvalidInputException
from ngram_search.shared.utils.sanitization import SqlSanitizer

if TYPE_CHECKING:
    from ngram_search.domain.value_objects import NgramConfig
    from ngram_search.infrastructure.persistence.dialects import SqlDialect

NO_MATCH_CONDITION = "1 = 0"


def as_clause(fragment: str) -> TextClause:
    """Wrap a finished SQL fragment in text(), escaping colons.

    Without the escape, a value such as '{"a":1}' would be read as the bind
    parameter ':1'.
    """
    return text(fragment.replace(":", "\\:"))


def ensure_no_injection_markers(values: Any, field: str = "search_text") -> None:
    """Raise InvalidInputException if any value contains ', ", -- or ;."""
    if any(SqlSanitizer.contains_injection_marker(v) for v in values):
        raise InvalidInputException(
            "Invalid characters (SQL injection?) in search text", field=field
        )


class SearchPredicateBuilder:
    """Turns a search phrase into a lenient n-gram match condition and rank expression.

    Uses the same NgramConfig as indexing, so phrase n-grams are comparable
    with stored ones. A record matches when it contains at least one n-gram of
    the phrase.
    """

    def __init__(self, dialect: SqlDialect, ngram_service: NgramService | None = None) -> None:
        self.dialect = dialect
        self.ngram_service = ngram_service or NgramService()

    def build_search_query(self, phrase: str | None, config: NgramConfig) -> str:
        """Return the phrase's n-grams joined with the dialect's lenient OR.

        Returns "" when every word is shorter than config.min_length: such a
        phrase is valid but matches nothing.

        Raises:
            InvalidInputException: If the phrase is blank or an n-gram contains
                an injection marker.
        """
        if phrase is None or not phrase.strip():
            raise InvalidInputException("Search text must not be blank", field="search_text")
        ngrams = self.ngram_service.generate(phrase, config)
        if not ngrams:
            return ""
        # tokenization drops punctuation already; checked again before embedding
        ensure_no_injection_markers(ngrams)
        return self.dialect.create_lenient_full_text_search_condition(ngrams)

    def build_condition(
        self,
        phrase: str | None,
        config: NgramConfig,
        column: str = FULL_TEXT_SEARCH_DATA_COLUMN,
    ) -> str:
        """Return a boolean fragment matching records that share any n-gram with phrase."""
        query = self.build_search_query(phrase, config)
        return self.build_condition_for_query(query, column)

    def build_condition_for_query(
        self, search_query: str, column: str = FULL_TEXT_SEARCH_DATA_COLUMN
    ) -> str:
        """Return the full-text match fragment for an already built search query.

        An empty query (no searchable words) yields a condition matching nothing.
        """
        SqlSanitizer.validate_column_name(column)
        if not search_query:
            return NO_MATCH_CONDITION
        ensure_no_injection_markers((search_query,))
        return self.dialect.full_text_search_template.format(column=column, query=search_query)

    def build_rank_expression(
        self, search_query: str, column: str = FULL_TEXT_SEARCH_DATA_COLUMN
    ) -> str:
        """Return the numeric rank fragment for an already built search query."""
        SqlSanitizer.validate_column_name(column)
        ensure_no_injection_markers((search_query,))
        return self.dialect.full_text_search_rank_template.format(
            column=column, query=search_query
        )

    def build_json_contains_condition(self, property_name: str, value: Any) -> str:
        """Return a boolean fragment matching rows whose JSON column contains value.

        value may be a scalar or a JSON-serializable structure.

        Raises:
            InvalidInputException: If property_name is not a plain identifier or
                value cannot be encoded as JSON.
        """
        if not SqlSanitizer.is_valid_column_name(property_name):
            raise InvalidInputException("Invalid property name", field="property_name")
        try:
            value_json = json.dumps(value, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise InvalidInputException(f"JSON error: {e}", field="value") from e
        return self.dialect.json_contains_template.format(
            column=property_name, value=SqlSanitizer.quote_literal_body(value_json)
        )
