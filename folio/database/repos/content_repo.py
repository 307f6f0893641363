# folio/database/repos/content_repo.py
from __future__ import annotations
from typing import Optional, List, Tuple
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from folio.database.models import Content, ContentMetadata, User
from folio.domain.enums import ContentStatus


class ContentRepo:
    """Authored content plus its key/value metadata."""

    def __init__(self, session: Session) -> None:
        self.db = session

    # -------- Content (CRUD) --------

    def get(self, content_id: UUID) -> Optional[Content]:
        return self.db.get(Content, content_id)

    def get_with_user(self, content_id: UUID) -> Optional[Tuple[Content, User]]:
        stmt = (
            select(Content, User)
            .join(User, Content.user_id == User.id)
            .where(Content.id == content_id)
            .limit(1)
        )
        row = self.db.execute(stmt).first()
        return (row[0], row[1]) if row else None

    def list_by_user(
        self,
        user_id: UUID,
        *,
        status: ContentStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Content]:
        stmt = select(Content).where(Content.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Content.status == status)
        stmt = stmt.order_by(Content.created_at.desc().nullslast()).offset(offset).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        *,
        user_id: UUID,
        title: str,
        body: str,
        status: ContentStatus | None = None,
    ) -> Content:
        obj = Content(user_id=user_id, title=title, body=body)
        if status is not None:
            obj.status = status
        self.db.add(obj)
        self.db.flush()
        self.db.refresh(obj)
        return obj

    def update(self, content_id: UUID, *, title: str | None = None, body: str | None = None) -> Content:
        obj = self.get(content_id)
        if not obj:
            raise ValueError("Content not found")
        if title is not None:
            obj.title = title
        if body is not None:
            obj.body = body
        self.db.flush()
        return obj

    def set_status(self, content_id: UUID, status: ContentStatus) -> Content:
        obj = self.get(content_id)
        if not obj:
            raise ValueError("Content not found")
        obj.status = ContentStatus(status)
        self.db.flush()
        return obj

    def delete(self, content_id: UUID) -> None:
        obj = self.get(content_id)
        if not obj:
            return
        self.db.delete(obj)
        self.db.flush()

    # -------- Metadata --------

    def list_metadata(self, content_id: UUID) -> List[ContentMetadata]:
        stmt = (
            select(ContentMetadata)
            .where(ContentMetadata.content_id == content_id)
            .order_by(ContentMetadata.key.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_metadata(self, content_id: UUID, *, key: str, value: str) -> ContentMetadata:
        if not self.get(content_id):
            raise ValueError("Content not found")
        entry = ContentMetadata(content_id=content_id, key=key, value=value)
        self.db.add(entry)
        self.db.flush()
        return entry

    def delete_metadata(self, content_id: UUID, metadata_id: UUID) -> None:
        self.db.execute(
            delete(ContentMetadata).where(
                ContentMetadata.content_id == content_id,
                ContentMetadata.id == metadata_id,
            )
        )
