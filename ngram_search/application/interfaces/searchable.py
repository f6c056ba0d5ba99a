"""Contract a record type satisfies to take part in n-gram full-text search.

Structural (typing.Protocol): the SQLAlchemy FullTextSearchMixin satisfies it,
but plain objects with the same attributes work too.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ngram_search.domain.value_objects import NgramConfig

TextSource = Callable[[], "str | None"]


@runtime_checkable
class SearchableRecord(Protocol):
    """Record whose text sources are indexed as n-grams on every write."""

    ngram_config: ClassVar[NgramConfig]
    max_full_text_search_data_length: ClassVar[int]

    full_text_search_data: str | None
    full_text_search_data_checksum: str | None

    def full_text_search_sources(self) -> Sequence[TextSource | None]:
        """Ordered accessors producing searchable text.

        Accessors are evaluated lazily on each write. None accessors and
        None or blank values are ignored.
        """
        ...
