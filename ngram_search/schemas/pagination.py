"""Pagination and sort request schema."""

from pydantic import BaseModel, Field, field_validator

from ngram_search.core.config import get_settings
from ngram_search.core.constants import DEFAULT_PAGE_SIZE
from ngram_search.domain.enums import SortDirection
from ngram_search.domain.value_objects import PaginationRequest, SortOrder


def parse_sort_order(value: str) -> SortOrder:
    """Parse 'field' or 'field,asc|desc' (direction case-insensitive, default asc)."""
    field_name, _, direction = value.partition(",")
    field_name = field_name.strip()
    if not field_name:
        raise ValueError("sort field must not be empty")
    direction = direction.strip().lower() or SortDirection.ASC.value
    if direction not in SortDirection.values():
        raise ValueError(
            f"sort direction must be one of {SortDirection.values()}, got: {direction!r}"
        )
    return SortOrder(field_name, SortDirection(direction))


class PaginationParams(BaseModel):
    """Page request as received from a caller (e.g. query parameters).

    size=None requests all matching rows. sort items are 'field' or
    'field,direction'; '_searchRank' requests relevance order.
    """

    page: int = Field(0, ge=0, description="Zero-based page number")
    size: int | None = Field(
        DEFAULT_PAGE_SIZE, ge=1, description="Page size; null for unpaged"
    )
    sort: list[str] = Field(default_factory=list, description="field[,asc|desc]")

    @field_validator("size")
    @classmethod
    def size_within_limit(cls, v: int | None) -> int | None:
        max_page_size = get_settings().max_page_size
        if v is not None and v > max_page_size:
            raise ValueError(f"size must not exceed {max_page_size}")
        return v

    @field_validator("sort")
    @classmethod
    def sort_items_parse(cls, v: list[str]) -> list[str]:
        for item in v:
            parse_sort_order(item)
        return v

    def to_request(self) -> PaginationRequest:
        """Convert to a PaginationRequest (unpaged requests always start at page 0)."""
        orders = tuple(parse_sort_order(item) for item in self.sort)
        if self.size is None:
            return PaginationRequest.unpaged(*orders)
        return PaginationRequest.of(self.page, self.size, *orders)
