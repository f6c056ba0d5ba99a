"""Persistence repositories."""

from ngram_search.infrastructure.persistence.repositories.base import BaseRepository
from ngram_search.infrastructure.persistence.repositories.search_repo import (
    SearchableRepository,
)

__all__ = ["BaseRepository", "SearchableRepository"]
