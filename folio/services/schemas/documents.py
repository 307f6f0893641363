# folio/services/schemas/documents.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from folio.domain.enums import SimilarityOperator


class DocumentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class DocumentUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)
    metadata: Optional[Dict[str, Any]] = None


class DocumentRead(BaseModel):
    """The embedding itself is not echoed back; 1536 floats per row is noise for API callers."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(default_factory=dict, validation_alias=AliasChoices("meta_data", "metadata"))


class DocumentSearch(BaseModel):
    query: str = Field(..., min_length=1)
    operator: SimilarityOperator = SimilarityOperator.cosine
    limit: int = Field(5, ge=1, le=100)
    threshold: float = Field(0.8, ge=0.0, le=1.0)
    filter_metadata: Optional[Dict[str, Any]] = None
    hybrid: bool = False


class SearchHitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    similarity: float


class DocumentSearchResult(BaseModel):
    hits: List[SearchHitRead]
