"""SQLAlchemy model mixins."""

from ngram_search.infrastructure.persistence.models.mixins import (
    CuidMixin,
    FullTextSearchMixin,
    TimestampMixin,
)

__all__ = ["CuidMixin", "FullTextSearchMixin", "TimestampMixin"]
