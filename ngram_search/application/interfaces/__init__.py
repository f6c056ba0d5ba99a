"""Application interfaces (ports)."""

from ngram_search.application.interfaces.searchable import SearchableRecord, TextSource

__all__ = ["SearchableRecord", "TextSource"]
