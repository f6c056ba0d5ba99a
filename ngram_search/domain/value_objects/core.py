"""Domain value objects for n-gram search.

Value objects are immutable types with self-validation. They have no
identity, only value.
"""

from dataclasses import dataclass
from typing import ClassVar

from ngram_search.core.constants import DEFAULT_PAGE_SIZE
from ngram_search.domain.enums import NgramMode, SortDirection


@dataclass(frozen=True)
class NgramConfig:
    """N-gram generation settings for one record type.

    Must be the same for every instance of a record type; search phrases are
    split with the same config that was used for indexing.
    """

    mode: NgramMode = NgramMode.ALL
    min_length: int = 3
    max_length: int = 10

    DEFAULT: ClassVar["NgramConfig"]

    def __post_init__(self) -> None:
        """Validate length bounds.

        Raises:
            ValueError: If min_length < 1 or max_length < min_length.
        """
        if self.min_length < 1:
            raise ValueError("N-gram min_length must be at least 1")
        if self.max_length < self.min_length:
            raise ValueError("N-gram max_length must not be less than min_length")


NgramConfig.DEFAULT = NgramConfig()


@dataclass(frozen=True)
class SortOrder:
    """Single (field, direction) pair of a sort specification."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if not self.field or not self.field.strip():
            raise ValueError("Sort field must be a non-empty string")

    @classmethod
    def asc(cls, field_name: str) -> "SortOrder":
        return cls(field_name, SortDirection.ASC)

    @classmethod
    def desc(cls, field_name: str) -> "SortOrder":
        return cls(field_name, SortDirection.DESC)

    @property
    def is_descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class PaginationRequest:
    """Page number, page size and ordered sort specification.

    size=None means unpaged: all matching rows, still sorted. Page numbers
    are zero-based.
    """

    page: int = 0
    size: int | None = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = ()

    def __post_init__(self) -> None:
        """Validate page and size; normalize sort to a tuple.

        Raises:
            ValueError: If page is negative or size is not positive.
        """
        if self.page < 0:
            raise ValueError("Page number must not be negative")
        if self.size is not None and self.size < 1:
            raise ValueError("Page size must be at least 1")
        if self.size is None and self.page != 0:
            raise ValueError("Unpaged request must not have a page number")
        object.__setattr__(self, "sort", tuple(self.sort))

    @classmethod
    def of(cls, page: int, size: int, *orders: SortOrder) -> "PaginationRequest":
        return cls(page=page, size=size, sort=orders)

    @classmethod
    def unpaged(cls, *orders: SortOrder) -> "PaginationRequest":
        return cls(page=0, size=None, sort=orders)

    @property
    def is_paged(self) -> bool:
        return self.size is not None

    @property
    def is_sorted(self) -> bool:
        return bool(self.sort)

    @property
    def offset(self) -> int:
        """Number of rows to skip (0 when unpaged)."""
        return self.page * self.size if self.size is not None else 0

    def order_for(self, field_name: str) -> SortOrder | None:
        """Return the sort order for field_name, or None if not sorted by it."""
        for order in self.sort:
            if order.field == field_name:
                return order
        return None

    def with_sort(self, *orders: SortOrder) -> "PaginationRequest":
        """Return a copy with a different sort; page, size and unpagedness are kept."""
        return PaginationRequest(page=self.page, size=self.size, sort=orders)
