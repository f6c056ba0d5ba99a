"""SQL fragment sanitization: identifier checks, literal quoting, injection markers.

Query fragments are assembled by string substitution and handed to the query
layer as already-safe SQL, so every interpolated value passes through here
first.
"""

import re
from typing import ClassVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ngram_search.domain.exceptions import InvalidInputException


class SqlSanitizer:
    """Allowlist validation and escaping for values embedded into SQL text."""

    COLUMN_NAME_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[A-Za-z_][A-Za-z0-9_]*$"
    )
    # Quote, double quote, comment start, statement separator
    INJECTION_MARKERS: ClassVar[tuple[str, ...]] = ("'", '"', "--", ";")
    UTC_OFFSET_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[+-](?:0\d|1[0-4]):[0-5]\d$"
    )
    TIME_ZONE_KEY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*$"
    )

    @classmethod
    def is_valid_column_name(cls, value: str | None) -> bool:
        """Return True if value is a plain SQL identifier (no quoting needed)."""
        return bool(value) and cls.COLUMN_NAME_PATTERN.match(value) is not None

    @classmethod
    def validate_column_name(cls, value: str | None, field: str = "column") -> str:
        """Return value if it is a plain SQL identifier.

        Raises:
            InvalidInputException: If value is empty or has characters outside
                the identifier allowlist.
        """
        if not cls.is_valid_column_name(value):
            raise InvalidInputException(f"Invalid {field} name", field=field)
        return value  # type: ignore[return-value]

    @classmethod
    def contains_injection_marker(cls, value: str) -> bool:
        """Return True if value contains a quote, double quote, '--' or ';'."""
        return any(marker in value for marker in cls.INJECTION_MARKERS)

    @classmethod
    def quote_literal_body(cls, value: str) -> str:
        """Escape value for use inside a single-quoted SQL string literal."""
        return value.replace("'", "''")

    @classmethod
    def validate_time_zone(cls, value: str | None) -> str:
        """Return value if it is an IANA zone key (e.g. 'Europe/Paris') or '+05:30'.

        Raises:
            InvalidInputException: If the zone is unknown or malformed.
        """
        if not value:
            raise InvalidInputException("Time zone must be a non-empty string", field="time_zone")
        if cls.UTC_OFFSET_PATTERN.match(value):
            return value
        if not cls.TIME_ZONE_KEY_PATTERN.match(value):
            raise InvalidInputException("Invalid time zone format", field="time_zone")
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidInputException(f"Unknown time zone: {value}", field="time_zone") from e
        return value


def validate_column_name(value: str | None, field: str = "column") -> str:
    """Validate and return a SQL identifier; raises InvalidInputException if invalid."""
    return SqlSanitizer.validate_column_name(value, field)
