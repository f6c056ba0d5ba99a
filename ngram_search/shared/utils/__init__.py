"""Shared utilities: SQL sanitization."""

from ngram_search.shared.utils.sanitization import SqlSanitizer, validate_column_name

__all__ = [
    "SqlSanitizer",
    "validate_column_name",
]
