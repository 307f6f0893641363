"""Isolated, schema-namespaced Postgres for tests."""

from folio.database.testing.harness import DatabaseHarness, ProvisionedDatabase, default_test_id
from folio.database.testing.locking import DEADLOCK_SQLSTATE, is_deadlock, with_deadlock_retry
from folio.database.testing.pool import build_test_engine, ssl_mode_for

__all__ = [
    "DatabaseHarness",
    "ProvisionedDatabase",
    "default_test_id",
    "DEADLOCK_SQLSTATE",
    "is_deadlock",
    "with_deadlock_retry",
    "build_test_engine",
    "ssl_mode_for",
]
