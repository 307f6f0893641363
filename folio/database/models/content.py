# folio/database/models/content.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, List
from uuid import UUID as UUID_t

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from folio.database.core.main import Base
from folio.database.core.service_object import Timestamped
from folio.database.models.users import User
from folio.domain.enums import ContentStatus


class Content(Timestamped, Base):
    __tablename__ = "content"

    id: Mapped[UUID_t] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")
    )
    user_id: Mapped[UUID_t] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    # stored as plain text; the enum only validates on the Python side
    status: Mapped[ContentStatus] = mapped_column(
        SAEnum(ContentStatus, name="content_status", native_enum=False, create_constraint=False, length=16),
        server_default=text("'draft'"),
    )

    user: Mapped[User] = relationship(back_populates="contents")
    metadata_entries: Mapped[List["ContentMetadata"]] = relationship(
        back_populates="content", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Content id={self.id} title={self.title!r} status={self.status}>"


class ContentMetadata(Base):
    """Free-form key/value pairs hanging off a content row (table "metadata")."""
    __tablename__ = "metadata"

    id: Mapped[UUID_t] = mapped_column(
        UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")
    )
    content_id: Mapped[Optional[UUID_t]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("content.id", ondelete="CASCADE")
    )
    key: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=func.now())

    content: Mapped[Optional[Content]] = relationship(back_populates="metadata_entries")
