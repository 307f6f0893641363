# folio/domain/dataclasses/search.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SearchHit:
    """One row of a similarity query: the document plus its score (1 - distance, or a blended score)."""
    id: int
    content: Optional[str]
    similarity: float
    metadata: Dict[str, Any] = field(default_factory=dict)
