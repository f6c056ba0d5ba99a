"""Domain enumerations for n-gram search.

Enums represent fixed sets of domain values (generation mode, sort
direction, date bucket).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class NgramMode(_ValuesMixin, str, Enum):
    """Which tokens the n-gram generator emits.

    WORDS emits whole words, NGRAMS emits character n-grams of each word,
    ALL emits both (whole words first).
    """

    WORDS = "words"
    NGRAMS = "ngrams"
    ALL = "all"


class SortDirection(_ValuesMixin, str, Enum):
    """Sort direction for a single sort order."""

    ASC = "asc"
    DESC = "desc"


class DateBucket(_ValuesMixin, str, Enum):
    """Granularity for converting a timestamp into a date."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
