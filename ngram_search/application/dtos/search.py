"""DTOs for paginated search results (no dependency on ORM)."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ngram_search.domain.value_objects import PaginationRequest

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results with the total match count and the pagination actually applied."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    pagination: PaginationRequest = field(default_factory=PaginationRequest)

    @property
    def total_pages(self) -> int:
        """Number of pages (1 for an unpaged request with results)."""
        size = self.pagination.size
        if size is None:
            return 1 if self.total else 0
        return (self.total + size - 1) // size
