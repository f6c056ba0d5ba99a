"""Domain value objects."""

from ngram_search.domain.value_objects.core import (
    NgramConfig,
    PaginationRequest,
    SortOrder,
)

__all__ = [
    "NgramConfig",
    "PaginationRequest",
    "SortOrder",
]
