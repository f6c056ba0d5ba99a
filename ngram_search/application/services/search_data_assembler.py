"""Write-pipeline stage that (re)builds the n-gram search data of a record.

Run it on every insert and update, before the write is flushed. It gathers
the record's text sources, checksums the raw text, and only regenerates
n-grams when the checksum differs from the stored one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ngram_search.application.services.checksum_service import ChecksumService
from ngram_search.application.services.ngram_config_cache import (
    NgramConfigCache,
    ngram_config_cache,
)
from ngram_search.application.services.ngram_service import NgramService
from ngram_search.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ngram_search.application.interfaces.searchable import SearchableRecord

RecordT = TypeVar("RecordT", bound="SearchableRecord")
_logger = get_logger(__name__)

NGRAM_SEPARATOR = " "


def collect_search_text(record: SearchableRecord) -> str:
    """Join non-blank source values with a single space, in source order."""
    sources = record.full_text_search_sources() or ()
    values = (source() for source in sources if source is not None)
    return NGRAM_SEPARATOR.join(v for v in values if v is not None and v.strip())


def join_ngrams_within_limit(ngrams: Iterable[str], max_length: int) -> str:
    """Append n-grams while the result stays within max_length.

    Stops at the first n-gram that does not fit; never appends part of one.
    """
    parts: list[str] = []
    length = 0
    for ngram in ngrams:
        separator_length = len(NGRAM_SEPARATOR) if parts else 0
        if length + separator_length + len(ngram) > max_length:
            break
        parts.append(ngram)
        length += separator_length + len(ngram)
    return NGRAM_SEPARATOR.join(parts)


class SearchDataAssembler:
    """Fills full_text_search_data and its checksum on a SearchableRecord."""

    def __init__(
        self,
        ngram_service: NgramService | None = None,
        checksum_service: ChecksumService | None = None,
        config_cache: NgramConfigCache | None = None,
    ) -> None:
        self.ngram_service = ngram_service or NgramService()
        self.checksum_service = checksum_service or ChecksumService()
        self.config_cache = config_cache if config_cache is not None else ngram_config_cache

    def before_write(self, record: RecordT) -> RecordT:
        """Rebuild search data if the raw text changed; return the same record.

        A blank checksum is logged and tolerated: search data is an
        augmentation and must never block the write itself.
        """
        record_name = type(record).__name__
        record_id = getattr(record, "id", None)

        text = collect_search_text(record)
        new_checksum = self.checksum_service.compute(text)

        if not new_checksum or not new_checksum.strip():
            _logger.error(
                "Search data checksum blank for [%s] ID '%s'; rebuilding n-grams anyway",
                record_name,
                record_id,
            )
        elif new_checksum == record.full_text_search_data_checksum:
            _logger.debug(
                "Not rebuilding n-grams: content unchanged for [%s] ID '%s'",
                record_name,
                record_id,
            )
            return record

        config = self.config_cache.get(type(record))
        ngrams = self.ngram_service.generate(text, config)
        record.full_text_search_data = join_ngrams_within_limit(
            ngrams, record.max_full_text_search_data_length
        )
        record.full_text_search_data_checksum = new_checksum

        _logger.debug(
            "Rebuilt n-grams for [%s] ID '%s': %d n-grams, %d chars stored",
            record_name,
            record_id,
            len(ngrams),
            len(record.full_text_search_data),
        )
        return record
