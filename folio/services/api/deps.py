# folio/services/api/deps.py
from __future__ import annotations
from http import HTTPStatus
from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from folio.database.core.main import SessionLocal
from folio.domain.ports.embeddings import EmbeddingsPort
from folio.services.embeddings.openai_client import OpenAIEmbeddings


def get_embeddings() -> Generator[EmbeddingsPort, None, None]:
    """
    Provide an EmbeddingsPort implementation via DI.
    Tests override this with a deterministic fake.
    """
    with OpenAIEmbeddings() as client:
        yield client


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo/service using this session
    participates in the same transaction.

    Usage in routers:
      def endpoint(session: Session = Depends(transactional_session)):
          ...
    """
    # Session.begin() commits on normal exit and rolls back if an exception bubbles out.
    with db.begin():
        yield db


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> UUID:
    """
    Identity stub: the upstream identity provider puts the user id in X-User-Id.
    """
    if not x_user_id:
        raise HTTPException(status_code=HTTPStatus.UNAUTHORIZED, detail="You must be logged in to do this")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=HTTPStatus.UNAUTHORIZED, detail="Invalid user id")
