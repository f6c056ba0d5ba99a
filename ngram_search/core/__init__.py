"""Core: config and shared constants."""

from ngram_search.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
