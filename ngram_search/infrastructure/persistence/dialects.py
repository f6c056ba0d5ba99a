"""SQL dialects: store-specific templates for search, JSON and date fragments.

Templates are str.format strings. Slots receive identifiers and values that
the caller has already validated or escaped; a dialect performs no escaping.
Supporting another store means adding one SqlDialect subclass and registering
it in SQL_DIALECTS.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ngram_search.domain.enums import DateBucket
from ngram_search.domain.exceptions import ConfigurationException


class SqlDialect(ABC):
    """Abstract set of store-specific SQL templates (one instance per store)."""

    name: str

    @property
    @abstractmethod
    def json_contains_template(self) -> str:
        """Slots: column (JSON column), value (JSON text, SQL-escaped).

        Renders a boolean condition of the form ``... = 1``.
        """

    @property
    @abstractmethod
    def full_text_search_template(self) -> str:
        """Slots: column (n-gram column), query (lenient search query).

        Renders a boolean condition of the form ``... = 1``.
        """

    @property
    @abstractmethod
    def full_text_search_rank_template(self) -> str:
        """Slots: column, query. Renders a sortable numeric rank."""

    @property
    @abstractmethod
    def max_full_text_search_data_length(self) -> int:
        """Maximum length of the n-gram column content."""

    @property
    @abstractmethod
    def next_sequence_value_template(self) -> str:
        """Slot: sequence. Renders a statement returning the next sequence value."""

    @abstractmethod
    def create_lenient_full_text_search_condition(self, words: Iterable[str]) -> str:
        """Join words so that a record matches if at least one of them matches."""

    @abstractmethod
    def timestamp_to_date_template(self, bucket: DateBucket) -> str:
        """Slots: column, time_zone. Renders the date (start of bucket) of a timestamp."""

    @property
    @abstractmethod
    def timestamp_as_date_range_template(self) -> str:
        """Slots: column, time_zone. Binds :date_from and :date_to (inclusive)."""

    @abstractmethod
    def search_function_ddl(self) -> tuple[str, ...]:
        """Statements creating FULL_TEXT_SEARCH, FULL_TEXT_SEARCH_RANK and JSON_CONTAINS."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PostgresDialect(SqlDialect):
    """PostgreSQL: tsvector n-gram column, jsonb containment."""

    name = "postgres"

    # tsvector limit, see https://www.postgresql.org/docs/current/textsearch-limitations.html
    MAX_FULL_TEXT_SEARCH_DATA_LENGTH = 1024 * 1024 - 1

    _DATE_BUCKET_TEMPLATES = {
        DateBucket.DAY: "DATE({column} AT TIME ZONE '{time_zone}')",
        DateBucket.WEEK: "DATE(DATE_TRUNC('week', {column} AT TIME ZONE '{time_zone}'))",
        DateBucket.MONTH: "DATE(DATE_TRUNC('month', {column} AT TIME ZONE '{time_zone}'))",
        DateBucket.QUARTER: "DATE(DATE_TRUNC('quarter', {column} AT TIME ZONE '{time_zone}'))",
        DateBucket.YEAR: "DATE(DATE_TRUNC('year', {column} AT TIME ZONE '{time_zone}'))",
    }

    @property
    def json_contains_template(self) -> str:
        return "CAST(JSON_CONTAINS({column}, '{value}') AS int) = 1"

    @property
    def full_text_search_template(self) -> str:
        return "CAST(FULL_TEXT_SEARCH({column}, '{query}') AS int) = 1"

    @property
    def full_text_search_rank_template(self) -> str:
        return "CAST(FULL_TEXT_SEARCH_RANK({column}, '{query}') AS double precision)"

    @property
    def max_full_text_search_data_length(self) -> int:
        return self.MAX_FULL_TEXT_SEARCH_DATA_LENGTH

    @property
    def next_sequence_value_template(self) -> str:
        return "SELECT nextval('{sequence}')"

    def create_lenient_full_text_search_condition(self, words: Iterable[str]) -> str:
        """Join with OR; websearch_to_tsquery treats plain juxtaposition as AND."""
        return " OR ".join(words)

    def timestamp_to_date_template(self, bucket: DateBucket) -> str:
        return self._DATE_BUCKET_TEMPLATES[DateBucket(bucket)]

    @property
    def timestamp_as_date_range_template(self) -> str:
        return "DATE({column} AT TIME ZONE '{time_zone}') BETWEEN :date_from AND :date_to"

    def search_function_ddl(self) -> tuple[str, ...]:
        # 'simple' config: n-grams are stored verbatim, no stemming or stop words
        return (
            """
            CREATE OR REPLACE FUNCTION full_text_search(data tsvector, query text)
            RETURNS int AS $$
              SELECT CASE WHEN data @@ websearch_to_tsquery('simple', query) THEN 1 ELSE 0 END
            $$ LANGUAGE sql IMMUTABLE
            """,
            """
            CREATE OR REPLACE FUNCTION full_text_search_rank(data tsvector, query text)
            RETURNS double precision AS $$
              SELECT ts_rank(data, websearch_to_tsquery('simple', query))::double precision
            $$ LANGUAGE sql IMMUTABLE
            """,
            """
            CREATE OR REPLACE FUNCTION json_contains(data jsonb, value text)
            RETURNS int AS $$
              SELECT CASE WHEN data @> value::jsonb THEN 1 ELSE 0 END
            $$ LANGUAGE sql IMMUTABLE
            """,
        )


SQL_DIALECTS: dict[str, SqlDialect] = {
    PostgresDialect.name: PostgresDialect(),
}


def get_dialect(name: str) -> SqlDialect:
    """Return the registered dialect for name (case-insensitive).

    Raises:
        ConfigurationException: If no dialect is registered under that name.
    """
    dialect = SQL_DIALECTS.get((name or "").lower())
    if dialect is None:
        raise ConfigurationException(
            f"Unsupported SQL dialect {name!r}; expected one of {sorted(SQL_DIALECTS)}"
        )
    return dialect
