# folio/domain/ports/embeddings.py
from __future__ import annotations
from typing import List, Protocol

class EmbeddingsPort(Protocol):
    dimensions: int

    def embed(self, text: str) -> List[float]: ...
