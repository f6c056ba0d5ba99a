"""Checksum of raw searchable text (canonical JSON + hash algorithm, base64)."""

from __future__ import annotations

import base64
import hashlib
import json
from abc import ABC, abstractmethod


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def digest(self, data: str) -> bytes:
        """Compute the raw digest of the input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def digest(self, data: str) -> bytes:
        return hashlib.sha256(data.encode()).digest()


class SHA512Algorithm(HashAlgorithm):
    """SHA-512 implementation."""

    def digest(self, data: str) -> bytes:
        return hashlib.sha512(data.encode()).digest()


class ChecksumService:
    """Stable checksum of the raw concatenated source text of a record.

    The checksum covers the raw text, never the n-grams: comparing it with the
    stored one is what lets unchanged content skip n-gram regeneration.
    """

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    @staticmethod
    def canonical_json(text: str) -> str:
        """Canonical JSON string literal for deterministic hashing."""
        return json.dumps(text, ensure_ascii=False, separators=(",", ":"))

    def compute(self, text: str) -> str:
        """Return the base64-encoded digest of canonical_json(text)."""
        raw = self.algorithm.digest(self.canonical_json(text))
        return base64.b64encode(raw).decode("ascii")
