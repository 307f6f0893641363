# folio/services/schemas/users.py
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    username: Optional[str] = Field(default=None, max_length=255)
    profile_image_url: Optional[str] = None


class UserCreate(UserBase):
    # identity-provider id; generated when omitted
    id: Optional[UUID] = None


class UserUpdate(BaseModel):
    email: Optional[str] = Field(default=None, min_length=3, max_length=320)
    username: Optional[str] = Field(default=None, max_length=255)
    profile_image_url: Optional[str] = None


class UserRead(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
