"""Application DTOs."""

from ngram_search.application.dtos.search import Page

__all__ = ["Page"]
