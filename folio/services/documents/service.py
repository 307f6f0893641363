# folio/services/documents/service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from folio.database.models import Document
from folio.database.repos.document_repo import DocumentRepo
from folio.domain.dataclasses.search import SearchHit
from folio.domain.enums import SimilarityOperator
from folio.domain.errors import NotFoundError
from folio.domain.ports.embeddings import EmbeddingsPort
from folio.services.embeddings.openai_client import prepare_for_embedding

log = logging.getLogger(__name__)


class DocumentService:
    """
    Document writes that need an embedding. The embedder is injected (EmbeddingsPort),
    so tests can pass a fake and production passes OpenAIEmbeddings.
    """

    def __init__(self, session: Session, embeddings: EmbeddingsPort) -> None:
        self.repo = DocumentRepo(session)
        self.embeddings = embeddings

    def create_document(
        self,
        *,
        title: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Document:
        embedding = self.embeddings.embed(prepare_for_embedding(title, content))
        doc = self.repo.create(content=content, embedding=embedding, metadata=metadata)
        log.info("Created document %s", doc.id)
        return doc

    def update_document(
        self,
        document_id: int,
        *,
        content: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Document:
        current = self.repo.get(document_id)
        if current is None:
            raise NotFoundError(f"Document {document_id} not found")

        # re-embed only when the text changes
        embedding = None
        if content is not None and content != current.content:
            embedding = self.embeddings.embed(content)
        return self.repo.update(
            document_id,
            content=content,
            embedding=embedding,
            metadata=metadata,
        )

    def delete_document(self, document_id: int) -> None:
        if not self.repo.delete(document_id):
            raise NotFoundError(f"Document {document_id} not found")

    def search(
        self,
        query: str,
        *,
        operator: SimilarityOperator = SimilarityOperator.cosine,
        limit: int = 5,
        threshold: float = 0.8,
        filter_metadata: Optional[Dict[str, Any]] = None,
        hybrid: bool = False,
    ) -> List[SearchHit]:
        embedding = self.embeddings.embed(query)
        if hybrid:
            return self.repo.hybrid_search(query, embedding, operator=operator, limit=limit, threshold=threshold)
        return self.repo.find_similar(
            embedding,
            operator=operator,
            limit=limit,
            threshold=threshold,
            filter_metadata=filter_metadata,
        )
