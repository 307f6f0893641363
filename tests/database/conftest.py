# tests/database/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session


@pytest.fixture()
def db(test_db) -> Session:
    """
    Per-test Session on the harness pool.
    The pool holds one connection, so the session is closed before test_db cleans up.
    """
    session = test_db.session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
