# tests/services/conftest.py
from __future__ import annotations

from typing import Dict, List

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from folio.services.api.app import create_app
from folio.services.api.deps import get_embeddings, transactional_session

DIMS = 1536


class FakeEmbeddings:
    """Deterministic EmbeddingsPort: known texts map to fixed axes, everything else to e0."""

    dimensions = DIMS

    def __init__(self, axes: Dict[str, int] | None = None) -> None:
        self.axes = dict(axes or {})
        self.calls: List[str] = []

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        v = [0.0] * DIMS
        v[self.axes.get(text, 0)] = 1.0
        return v


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def api_session(test_db) -> Session:
    session = test_db.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def api_client(api_session, fake_embeddings):
    """
    A TestClient whose `transactional_session` dependency is overridden to yield
    one Session on the harness pool. Every request in a test shares it, so
    POST -> GET works; a request that raises rolls back like the real dependency.
    """
    app = create_app()

    def _override():
        try:
            yield api_session
        except Exception:
            api_session.rollback()
            raise
        else:
            api_session.commit()
        finally:
            # behave like a fresh per-request session (ON DELETE CASCADE happens in the db)
            api_session.expire_all()

    app.dependency_overrides[transactional_session] = _override
    app.dependency_overrides[get_embeddings] = lambda: fake_embeddings

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
