# folio/services/api/routers/documents.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from folio.common.settings import get_settings
from folio.database.repos.document_repo import DocumentRepo
from folio.domain.errors import EmbeddingDimensionError, EmbeddingProviderError, NotFoundError
from folio.domain.ports.embeddings import EmbeddingsPort
from folio.services.api.deps import get_embeddings, transactional_session
from folio.services.documents.service import DocumentService
from folio.services.schemas.documents import (
    DocumentCreate, DocumentRead, DocumentUpdate,
    DocumentSearch, DocumentSearchResult, SearchHitRead,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/documents", tags=["documents"])


def _service(db: Session, embeddings: EmbeddingsPort) -> DocumentService:
    return DocumentService(db, embeddings)


def _embedding_failure(exc: Exception) -> HTTPException:
    if isinstance(exc, EmbeddingDimensionError):
        return HTTPException(status_code=HTTPStatus.UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(exc))


@router.post("", response_model=DocumentRead, status_code=HTTPStatus.CREATED)
def create_document(
    payload: DocumentCreate,
    db: Session = Depends(transactional_session),
    embeddings: EmbeddingsPort = Depends(get_embeddings),
) -> DocumentRead:
    try:
        doc = _service(db, embeddings).create_document(
            title=payload.title, content=payload.content, metadata=payload.metadata
        )
    except (EmbeddingProviderError, EmbeddingDimensionError) as exc:
        raise _embedding_failure(exc)
    db.refresh(doc)
    return DocumentRead.model_validate(doc)


@router.post("/search", response_model=DocumentSearchResult)
def search_documents(
    payload: DocumentSearch,
    db: Session = Depends(transactional_session),
    embeddings: EmbeddingsPort = Depends(get_embeddings),
) -> DocumentSearchResult:
    try:
        hits = _service(db, embeddings).search(
            payload.query,
            operator=payload.operator,
            limit=payload.limit,
            threshold=payload.threshold,
            filter_metadata=payload.filter_metadata,
            hybrid=payload.hybrid,
        )
    except (EmbeddingProviderError, EmbeddingDimensionError) as exc:
        raise _embedding_failure(exc)
    return DocumentSearchResult(hits=[SearchHitRead.model_validate(h) for h in hits])


@router.get("/{document_id}", response_model=DocumentRead)
def get_document(
    document_id: int,
    db: Session = Depends(transactional_session),
) -> DocumentRead:
    doc = DocumentRepo(db).get(document_id)
    if doc is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Document not found")
    return DocumentRead.model_validate(doc)


@router.patch("/{document_id}", response_model=DocumentRead)
def update_document(
    document_id: int,
    payload: DocumentUpdate,
    db: Session = Depends(transactional_session),
    embeddings: EmbeddingsPort = Depends(get_embeddings),
) -> DocumentRead:
    try:
        doc = _service(db, embeddings).update_document(
            document_id, content=payload.content, metadata=payload.metadata
        )
    except NotFoundError:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Document not found")
    except (EmbeddingProviderError, EmbeddingDimensionError) as exc:
        raise _embedding_failure(exc)
    db.refresh(doc)
    return DocumentRead.model_validate(doc)


@router.delete("/{document_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_document(
    document_id: int,
    db: Session = Depends(transactional_session),
    embeddings: EmbeddingsPort = Depends(get_embeddings),
) -> None:
    try:
        _service(db, embeddings).delete_document(document_id)
    except NotFoundError:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Document not found")
    return None
