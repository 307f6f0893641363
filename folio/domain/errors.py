# folio/domain/errors.py
from __future__ import annotations


class NotFoundError(LookupError):
    """A requested row does not exist."""


class EmbeddingDimensionError(ValueError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"expected {expected} dimensions, not {actual}")
        self.expected = expected
        self.actual = actual


class EmbeddingProviderError(RuntimeError):
    """The embedding API failed or returned something unusable."""
