# folio/database/testing/harness.py
from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import Session, sessionmaker

from folio.common.settings import HarnessConfig, get_settings
from folio.database.testing.ddl import CLEANUP, CREATE_SCHEMAS, CREATE_TABLES
from folio.database.testing.locking import with_deadlock_retry
from folio.database.testing.pool import build_test_engine

T = TypeVar("T")

log = logging.getLogger(__name__)


def default_test_id() -> str:
    """Milliseconds since the epoch."""
    return str(int(time.time() * 1000))


@dataclass
class ProvisionedDatabase:
    """
    Handle returned by DatabaseHarness.provision(): a session factory bound to
    the shared pool plus a best-effort cleanup.

    The pool holds a single connection, so close every Session before calling
    cleanup() or provisioning again.
    """
    test_id: str
    engine: Engine
    session_factory: sessionmaker[Session] = field(repr=False)

    def session(self) -> Session:
        return self.session_factory()

    def cleanup(self) -> None:
        """
        Truncate every provisioned table with FK/trigger enforcement switched off.
        Errors are logged and swallowed: the next provision drops the schemas anyway.
        """
        log.info("Running cleanup for test %s", self.test_id)
        try:
            with self.engine.begin() as conn:
                for stmt in CLEANUP:
                    conn.execute(text(stmt))
        except Exception:
            log.exception("Cleanup error for test %s", self.test_id)
            return
        log.info("Cleanup complete for test %s", self.test_id)


class DatabaseHarness:
    """
    Process-scoped owner of the test connection pool.

    - pool(): lazily builds and pings the pool; later calls return it untouched.
    - run_locked(op): serializes `op` in-process and reruns it after deadlocks.
    - provision(test_id): drops/recreates the auth and test schemas and tables.
    - teardown(): disposes the pool once at the end of the run.

    Isolation comes from provision(), which always starts from empty schemas;
    cleanup() is only an optimization.
    """

    def __init__(
        self,
        url: str | URL,
        config: Optional[HarnessConfig] = None,
        *,
        engine_factory: Callable[[str | URL, HarnessConfig], Engine] = build_test_engine,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.url = url
        self.config = config or get_settings().test_db
        self._engine_factory = engine_factory
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._engine: Optional[Engine] = None
        self._lock = threading.RLock()

    @property
    def engine(self) -> Optional[Engine]:
        """The live pool, or None before first use / after teardown."""
        return self._engine

    # -------- pool --------

    def pool(self) -> Engine:
        if self._engine is not None:
            return self._engine

        with self._lock:
            if self._engine is not None:
                return self._engine
            engine = self._engine_factory(self.url, self.config)
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
            except Exception:
                log.exception("Failed to establish connection")
                engine.dispose()
                raise
            self._engine = engine
            log.info("Global connection pool established")
            return engine

    # -------- locking --------

    def run_locked(self, operation: Callable[[], T]) -> T:
        cfg = self.config
        with self._lock:
            return with_deadlock_retry(
                operation,
                min_backoff=cfg.deadlock_min_backoff_sec,
                max_backoff=cfg.deadlock_max_backoff_sec,
                max_attempts=cfg.deadlock_max_attempts,
                max_elapsed_sec=cfg.deadlock_max_elapsed_sec,
                sleep=self._sleep,
                rng=self._rng,
            )

    # -------- provisioning --------

    def provision(self, test_id: Optional[str] = None) -> ProvisionedDatabase:
        test_id = test_id or default_test_id()
        settings = get_settings()
        if not settings.is_test_env:
            log.warning("APP_ENV is not 'test' (got %r); provisioning anyway", settings.app_env)
        return self.run_locked(lambda: self._provision(test_id))

    def _provision(self, test_id: str) -> ProvisionedDatabase:
        log.info("Starting test database setup for test %s", test_id)
        try:
            engine = self.pool()
            with engine.begin() as conn:
                log.debug("Setting up database schemas")
                for stmt in CREATE_SCHEMAS:
                    conn.execute(text(stmt))
                log.debug("Creating tables")
                for stmt in CREATE_TABLES:
                    conn.execute(text(stmt))
        except Exception:
            log.exception("Database setup failed for test %s", test_id)
            raise

        log.info("Database setup completed successfully for test %s", test_id)
        return ProvisionedDatabase(
            test_id=test_id,
            engine=engine,
            session_factory=sessionmaker(bind=engine, expire_on_commit=False, autoflush=False),
        )

    # -------- teardown --------

    def teardown(self) -> None:
        """
        Wait the grace period, then dispose the pool within teardown_timeout_sec.
        Failures are logged; the pool reference is cleared regardless.
        """
        engine = self._engine
        if engine is None:
            return

        log.info("Closing global connection pool")
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pool-teardown")
        try:
            self._sleep(self.config.teardown_grace_sec)
            executor.submit(engine.dispose).result(timeout=self.config.teardown_timeout_sec)
            log.info("Global connection pool closed")
        except Exception:
            log.exception("Error closing global connection pool")
        finally:
            executor.shutdown(wait=False)
            self._engine = None
