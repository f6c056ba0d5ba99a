"""Date-bucketing and sequence fragments rendered through the active SQL dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ngram_search.domain.enums import DateBucket
from ngram_search.shared.utils.sanitization import SqlSanitizer

if TYPE_CHECKING:
    from ngram_search.infrastructure.persistence.dialects import SqlDialect


def build_date_bucket_expression(
    dialect: SqlDialect,
    column: str,
    bucket: DateBucket | str,
    time_zone: str = "UTC",
) -> str:
    """Return an expression giving the start date of column's bucket in time_zone.

    The same instant can fall on different dates depending on the zone, e.g.
    2026-01-01 00:00 UTC is 2025-12-31 in UTC-1.

    Raises:
        InvalidInputException: If column or time_zone is not safe to embed.
        ValueError: If bucket is not a DateBucket value.
    """
    SqlSanitizer.validate_column_name(column)
    SqlSanitizer.validate_time_zone(time_zone)
    return dialect.timestamp_to_date_template(DateBucket(bucket)).format(
        column=column, time_zone=time_zone
    )


def build_date_range_condition(dialect: SqlDialect, column: str, time_zone: str = "UTC") -> str:
    """Return a condition on column's local date; bind :date_from and :date_to when executing."""
    SqlSanitizer.validate_column_name(column)
    SqlSanitizer.validate_time_zone(time_zone)
    return dialect.timestamp_as_date_range_template.format(column=column, time_zone=time_zone)


def build_next_sequence_value_query(dialect: SqlDialect, sequence_name: str) -> str:
    """Return a statement selecting the next value of sequence_name."""
    SqlSanitizer.validate_column_name(sequence_name, field="sequence")
    return dialect.next_sequence_value_template.format(sequence=sequence_name)
