# folio/services/schemas/content.py
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from folio.domain.enums import ContentStatus


# ---------- Metadata ----------

class ContentMetadataCreate(BaseModel):
    key: str = Field(..., min_length=1)
    value: str


class ContentMetadataRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content_id: Optional[UUID] = None
    key: str
    value: str
    created_at: Optional[datetime] = None


# ---------- Content ----------

class ContentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    body: str
    status: Optional[ContentStatus] = None


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    body: Optional[str] = None


class ContentStatusUpdate(BaseModel):
    status: ContentStatus


class ContentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    body: str
    status: ContentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
