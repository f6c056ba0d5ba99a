"""Per-record-type cache of NgramConfig.

A record type's config is read once (from an explicit registration or the
type's ``ngram_config`` class attribute, never by instantiating the type) and
kept for the life of the process. Population races are harmless:
dict.setdefault keeps the first value stored and every racer computes the
same immutable config.
"""

from __future__ import annotations

from ngram_search.domain.exceptions import ConfigurationException
from ngram_search.domain.value_objects import NgramConfig
from ngram_search.shared.telemetry.logging import get_logger

_logger = get_logger(__name__)


class NgramConfigCache:
    """Maps record types to their NgramConfig; entries are never invalidated."""

    def __init__(self) -> None:
        self._configs: dict[type, NgramConfig] = {}

    def register(self, record_type: type, config: NgramConfig) -> None:
        """Register config for record_type explicitly (e.g. at startup).

        Raises:
            ConfigurationException: If a different config is already cached
                for record_type.
        """
        if not isinstance(config, NgramConfig):
            raise ConfigurationException(
                "Search config must be an NgramConfig", record_type
            )
        existing = self._configs.setdefault(record_type, config)
        if existing != config:
            raise ConfigurationException(
                f"Conflicting n-gram config for {record_type.__name__}: "
                f"{existing} is already registered",
                record_type,
            )

    def get(self, record_type: type) -> NgramConfig:
        """Return the config for record_type, reading its class attribute on a miss.

        Raises:
            ConfigurationException: If record_type does not declare an NgramConfig.
        """
        config = self._configs.get(record_type)
        if config is not None:
            return config

        config = getattr(record_type, "ngram_config", None)
        if not isinstance(config, NgramConfig):
            raise ConfigurationException(
                f"{record_type.__name__} does not declare an ngram_config; "
                "it cannot take part in full-text search",
                record_type,
            )
        _logger.debug("Caching n-gram config for %s: %s", record_type.__name__, config)
        return self._configs.setdefault(record_type, config)

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._configs

    def __len__(self) -> int:
        return len(self._configs)

    def clear(self) -> None:
        """Drop all entries. Intended for tests."""
        self._configs.clear()


ngram_config_cache = NgramConfigCache()
