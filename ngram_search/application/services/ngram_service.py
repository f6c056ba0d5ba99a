"""N-gram generation for fuzzy full-text search.

Text is NFKC-normalized and case-folded, then split into words made of
letters and digits only. Punctuation never reaches an n-gram, so quotes,
hyphens and semicolons cannot appear in indexed data or search queries.
"""

from __future__ import annotations

import re
import unicodedata

from ngram_search.domain.enums import NgramMode
from ngram_search.domain.value_objects import NgramConfig

_WORD_RE = re.compile(r"[^\W_]+")


def normalize_text(text: str | None) -> str:
    """Return text NFKC-normalized and case-folded ('' for None)."""
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text).casefold()


def tokenize(text: str | None) -> list[str]:
    """Split normalized text into unique words, in order of first appearance."""
    return list(dict.fromkeys(_WORD_RE.findall(normalize_text(text))))


def _char_ngrams(words: list[str], n_low: int, n_high: int) -> list[str]:
    """Character n-grams of each word: all n_low-grams first, then longer ones."""
    grams: list[str] = []
    for n in range(n_low, n_high + 1):
        for word in words:
            if len(word) < n:
                continue
            grams.extend(word[i : i + n] for i in range(len(word) - n + 1))
    return grams


class NgramService:
    """Turns text into an ordered, duplicate-free tuple of n-grams.

    Deterministic and side-effect free: equal text and config always yield
    the same tuple in the same order, which keeps length-bounded truncation
    reproducible. Words shorter than config.min_length yield nothing.
    """

    def generate(self, text: str | None, config: NgramConfig) -> tuple[str, ...]:
        """Return n-grams of text with lengths within [min_length, max_length]."""
        words = tokenize(text)
        if not words:
            return ()

        candidates: list[str] = []
        if config.mode in (NgramMode.WORDS, NgramMode.ALL):
            candidates.extend(
                w for w in words if config.min_length <= len(w) <= config.max_length
            )
        if config.mode in (NgramMode.NGRAMS, NgramMode.ALL):
            candidates.extend(_char_ngrams(words, config.min_length, config.max_length))
        return tuple(dict.fromkeys(candidates))


_default_service = NgramService()


def create_ngrams(text: str | None, config: NgramConfig = NgramConfig.DEFAULT) -> tuple[str, ...]:
    """Shortcut for NgramService().generate(text, config)."""
    return _default_service.generate(text, config)
