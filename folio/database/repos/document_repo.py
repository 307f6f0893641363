# folio/database/repos/document_repo.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import case, func, literal_column, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from folio.database.core.main import EMBEDDING_DIMENSIONS
from folio.database.models import Document
from folio.domain.dataclasses.search import SearchHit
from folio.domain.enums import SimilarityOperator
from folio.domain.errors import EmbeddingDimensionError

_TS_CONFIG = literal_column("'english'::regconfig")


def _columns() -> Tuple[ColumnElement[Any], ...]:
    return Document.id, Document.content, Document.meta_data.label("meta_data")


class DocumentRepo:
    """
    Document store with vector search. All distance math happens in Postgres (pgvector);
    this class only builds the statements.

    similarity = 1 - distance, for every operator (mirrors the match_documents SQL function).
    """

    def __init__(self, session: Session, *, dimensions: int = EMBEDDING_DIMENSIONS) -> None:
        self.db = session
        self.dimensions = dimensions

    # -------- helpers --------

    def _vector(self, embedding: Iterable[float]) -> List[float]:
        vec = [float(x) for x in embedding]
        if len(vec) != self.dimensions:
            raise EmbeddingDimensionError(self.dimensions, len(vec))
        return vec

    @staticmethod
    def _distance(other: Any, operator: SimilarityOperator | str) -> ColumnElement[float]:
        op = SimilarityOperator(operator)
        return getattr(Document.embedding, op.comparator)(other)

    @staticmethod
    def _hits(rows: Iterable[Any]) -> List[SearchHit]:
        return [
            SearchHit(id=r.id, content=r.content, metadata=r.meta_data or {}, similarity=float(r.similarity))
            for r in rows
        ]

    # -------- CRUD --------

    def get(self, document_id: int) -> Optional[Document]:
        return self.db.get(Document, document_id)

    def create(
        self,
        *,
        content: str | None,
        embedding: Sequence[float] | None = None,
        metadata: Dict[str, Any] | None = None,
    ) -> Document:
        obj = Document(
            content=content,
            meta_data=dict(metadata or {}),
            embedding=self._vector(embedding) if embedding is not None else None,
        )
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(
        self,
        document_id: int,
        *,
        content: str | None = None,
        embedding: Sequence[float] | None = None,
        metadata: Dict[str, Any] | None = None,
    ) -> Optional[Document]:
        obj = self.get(document_id)
        if obj is None:
            return None
        if content is not None:
            obj.content = content
        if embedding is not None:
            obj.embedding = self._vector(embedding)
        if metadata is not None:
            obj.meta_data = dict(metadata)
        self.db.flush()
        return obj

    def delete(self, document_id: int) -> bool:
        obj = self.get(document_id)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.flush()
        return True

    # -------- vector search --------

    def nearest(
        self,
        embedding: Sequence[float],
        *,
        limit: int = 1,
        operator: SimilarityOperator | str = SimilarityOperator.l2,
    ) -> List[Tuple[Document, float]]:
        """Plain k-NN: documents ordered by distance, no threshold."""
        distance = self._distance(self._vector(embedding), operator)
        stmt = (
            select(Document, distance.label("distance"))
            .where(Document.embedding.is_not(None))
            .order_by(distance)
            .limit(limit)
        )
        return [(doc, float(dist)) for doc, dist in self.db.execute(stmt).all()]

    def find_similar(
        self,
        embedding: Sequence[float],
        *,
        operator: SimilarityOperator | str = SimilarityOperator.cosine,
        limit: int = 5,
        threshold: float = 0.8,
        filter_metadata: Dict[str, Any] | None = None,
    ) -> List[SearchHit]:
        """Documents whose distance is below 1 - threshold, closest first."""
        distance = self._distance(self._vector(embedding), operator)
        stmt = (
            select(*_columns(), (1 - distance).label("similarity"))
            .where(Document.embedding.is_not(None), distance < 1 - threshold)
        )
        if filter_metadata:
            stmt = stmt.where(Document.meta_data.contains(filter_metadata))
        stmt = stmt.order_by(distance).limit(limit)
        return self._hits(self.db.execute(stmt).all())

    def match_documents(
        self,
        embedding: Sequence[float],
        *,
        limit: int | None = 5,
        filter_metadata: Dict[str, Any] | None = None,
    ) -> List[SearchHit]:
        """Cosine ranking with a JSONB containment filter and no threshold."""
        distance = self._distance(self._vector(embedding), SimilarityOperator.cosine)
        stmt = (
            select(*_columns(), (1 - distance).label("similarity"))
            .where(Document.meta_data.contains(filter_metadata or {}))
            .order_by(distance)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._hits(self.db.execute(stmt).all())

    def hybrid_search(
        self,
        query: str,
        embedding: Sequence[float],
        *,
        operator: SimilarityOperator | str = SimilarityOperator.cosine,
        limit: int = 5,
        threshold: float = 0.8,
        weight_vector: float = 0.7,
        weight_text: float = 0.3,
    ) -> List[SearchHit]:
        """
        Blend vector similarity with full-text rank:
            score = (1 - distance) * weight_vector + ts_rank_cd * weight_text
        Documents that do not match the text query contribute 0 from the text side.
        """
        distance = self._distance(self._vector(embedding), operator)
        tsv = func.to_tsvector(_TS_CONFIG, func.coalesce(Document.content, ""))
        tsq = func.plainto_tsquery(_TS_CONFIG, query)
        text_rank = case((tsv.op("@@", is_comparison=True)(tsq), func.ts_rank_cd(tsv, tsq)), else_=0.0)
        score = ((1 - distance) * weight_vector + text_rank * weight_text).label("similarity")

        stmt = (
            select(*_columns(), score)
            .where(Document.embedding.is_not(None), distance < 1 - threshold)
            .order_by(score.desc())
            .limit(limit)
        )
        return self._hits(self.db.execute(stmt).all())

    def recommend(
        self,
        document_ids: Sequence[int],
        *,
        operator: SimilarityOperator | str = SimilarityOperator.cosine,
        limit: int = 5,
        threshold: float = 0.8,
    ) -> List[SearchHit]:
        """Documents close to the average embedding of `document_ids`, excluding those ids."""
        ids = list(document_ids)
        if not ids:
            return []

        centroid = select(func.avg(Document.embedding)).where(Document.id.in_(ids)).scalar_subquery()
        distance = self._distance(centroid, operator)
        stmt = (
            select(*_columns(), (1 - distance).label("similarity"))
            .where(
                Document.id.not_in(ids),
                Document.embedding.is_not(None),
                distance < 1 - threshold,
            )
            .order_by(distance)
            .limit(limit)
        )
        return self._hits(self.db.execute(stmt).all())
