# folio/database/models/documents.py
from __future__ import annotations

from typing import Optional, Sequence

from pgvector.sqlalchemy import Vector
from sqlalchemy import BigInteger, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from folio.database.core.main import Base, EMBEDDING_DIMENSIONS


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    content: Mapped[Optional[str]] = mapped_column(Text)
    # "metadata" is reserved on declarative classes, hence the attribute name
    meta_data: Mapped[Optional[dict]] = mapped_column("metadata", JSONB, server_default=text("'{}'"))
    embedding: Mapped[Optional[Sequence[float]]] = mapped_column(Vector(EMBEDDING_DIMENSIONS))

    def __repr__(self) -> str:
        return f"<Document id={self.id}>"
