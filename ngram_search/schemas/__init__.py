"""Pydantic request schemas."""

from ngram_search.schemas.pagination import PaginationParams, parse_sort_order

__all__ = ["PaginationParams", "parse_sort_order"]
