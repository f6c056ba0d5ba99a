"""Persistence: database runtime, SQL dialects, model mixins, repositories."""

from ngram_search.infrastructure.persistence.dialects import (
    SQL_DIALECTS,
    PostgresDialect,
    SqlDialect,
    get_dialect,
)

__all__ = ["SQL_DIALECTS", "PostgresDialect", "SqlDialect", "get_dialect"]
