# tests/conftest.py
from __future__ import annotations

import os
import re

# Must be set before folio.common.settings is imported anywhere.
os.environ.setdefault("APP_ENV", "test")

import pytest
from testcontainers.postgres import PostgresContainer

from folio.common.settings import get_settings
from folio.database.testing import DatabaseHarness, ProvisionedDatabase


def _with_sslmode_disabled(url: str) -> str:
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}sslmode=disable"


@pytest.fixture(scope="session")
def pg_url():
    """
    TEST_DATABASE_URL when set, otherwise a throwaway pgvector container.
    The container is local, so TLS is switched off explicitly.
    """
    cfg = get_settings()
    if cfg.test_database_url or not cfg.use_testcontainers:
        yield cfg.harness_url()
        return

    container = PostgresContainer(cfg.test_db_image, driver="psycopg")
    try:
        container.start()
    except Exception as exc:  # docker missing / not running
        pytest.skip(f"Cannot start {cfg.test_db_image}: {exc}")
    try:
        yield _with_sslmode_disabled(container.get_connection_url())
    finally:
        container.stop()


@pytest.fixture(scope="session")
def harness(pg_url) -> DatabaseHarness:
    """One pool for the whole run; disposed once at session end."""
    config = get_settings().test_db.model_copy(update={"teardown_grace_sec": 0.0})
    h = DatabaseHarness(pg_url, config)
    try:
        yield h
    finally:
        h.teardown()


def _test_id(nodeid: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]+", "_", nodeid).strip("_")[:63]


@pytest.fixture()
def test_db(harness, request) -> ProvisionedDatabase:
    """
    Freshly dropped and recreated auth/test schemas for every test.
    Cleanup afterwards is best effort; the next provision starts from scratch anyway.
    """
    provisioned = harness.provision(_test_id(request.node.nodeid))
    try:
        yield provisioned
    finally:
        provisioned.cleanup()
