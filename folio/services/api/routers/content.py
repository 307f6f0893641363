# folio/services/api/routers/content.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from folio.common.settings import get_settings
from folio.database.models import Content
from folio.database.repos.content_repo import ContentRepo
from folio.database.repos.user_repo import UserRepo
from folio.domain.enums import ContentStatus
from folio.services.api.deps import get_current_user_id, transactional_session
from folio.services.schemas.content import (
    ContentCreate, ContentRead, ContentUpdate, ContentStatusUpdate,
    ContentMetadataCreate, ContentMetadataRead,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/content", tags=["content"])


# ---- helpers ----

def _own_content_or_404(repo: ContentRepo, content_id: UUID, user_id: UUID) -> Content:
    # someone else's content is reported as missing, not forbidden
    obj = repo.get(content_id)
    if not obj or obj.user_id != user_id:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Content not found")
    return obj


# ---- CRUD ----

@router.get("", response_model=List[ContentRead])
def list_content(
    status: Optional[ContentStatus] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> List[ContentRead]:
    rows = ContentRepo(db).list_by_user(user_id, status=status, limit=limit, offset=offset)
    return [ContentRead.model_validate(c) for c in rows]


@router.post("", response_model=ContentRead, status_code=HTTPStatus.CREATED)
def create_content(
    payload: ContentCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> ContentRead:
    if not UserRepo(db).get(user_id):
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="User not found")
    obj = ContentRepo(db).create(user_id=user_id, title=payload.title, body=payload.body, status=payload.status)
    return ContentRead.model_validate(obj)


@router.get("/{content_id}", response_model=ContentRead)
def get_content(
    content_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> ContentRead:
    return ContentRead.model_validate(_own_content_or_404(ContentRepo(db), content_id, user_id))


@router.patch("/{content_id}", response_model=ContentRead)
def update_content(
    content_id: UUID,
    payload: ContentUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> ContentRead:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    obj = repo.update(content_id, title=payload.title, body=payload.body)
    db.refresh(obj)
    return ContentRead.model_validate(obj)


@router.post("/{content_id}/status", response_model=ContentRead)
def set_content_status(
    content_id: UUID,
    payload: ContentStatusUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> ContentRead:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    obj = repo.set_status(content_id, payload.status)
    db.refresh(obj)
    return ContentRead.model_validate(obj)


@router.delete("/{content_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_content(
    content_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> None:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    repo.delete(content_id)
    return None


# ---- Metadata ----

@router.get("/{content_id}/metadata", response_model=List[ContentMetadataRead])
def list_content_metadata(
    content_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> List[ContentMetadataRead]:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    return [ContentMetadataRead.model_validate(m) for m in repo.list_metadata(content_id)]


@router.post("/{content_id}/metadata", response_model=ContentMetadataRead, status_code=HTTPStatus.CREATED)
def add_content_metadata(
    content_id: UUID,
    payload: ContentMetadataCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> ContentMetadataRead:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    entry = repo.add_metadata(content_id, key=payload.key, value=payload.value)
    db.refresh(entry)
    return ContentMetadataRead.model_validate(entry)


@router.delete("/{content_id}/metadata/{metadata_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_content_metadata(
    content_id: UUID,
    metadata_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(transactional_session),
) -> None:
    repo = ContentRepo(db)
    _own_content_or_404(repo, content_id, user_id)
    repo.delete_metadata(content_id, metadata_id)
    return None
