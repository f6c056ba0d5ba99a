"""SQLAlchemy mixins for searchable models.

Provides: CuidMixin, TimestampMixin, FullTextSearchMixin.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import ClassVar

from cuid2 import cuid_wrapper
from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from ngram_search.application.interfaces.searchable import TextSource
from ngram_search.domain.value_objects import NgramConfig
from ngram_search.infrastructure.persistence.dialects import PostgresDialect

generate_cuid = cuid_wrapper()


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class FullTextSearchMixin:
    """Mixin for models searchable by n-grams.

    Adds the n-gram column (tsvector on PostgreSQL, text elsewhere) and the
    checksum of the raw text it was built from. Subclasses implement
    full_text_search_sources() and may override ngram_config or
    max_full_text_search_data_length. Roughly 100 words yield 1000 n-grams.
    """

    ngram_config: ClassVar[NgramConfig] = NgramConfig.DEFAULT
    max_full_text_search_data_length: ClassVar[int] = (
        PostgresDialect.MAX_FULL_TEXT_SEARCH_DATA_LENGTH
    )

    @declared_attr
    def full_text_search_data(cls) -> Mapped[str | None]:
        return mapped_column(
            Text().with_variant(TSVECTOR(), "postgresql"),
            nullable=True,
        )

    @declared_attr
    def full_text_search_data_checksum(cls) -> Mapped[str | None]:
        return mapped_column(String(255), nullable=True)

    def full_text_search_sources(self) -> Sequence[TextSource | None]:
        """Ordered accessors for searchable text; stringify non-text values explicitly."""
        raise NotImplementedError(
            f"{type(self).__name__} must implement full_text_search_sources()"
        )
