# folio/database/alembic/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Connection

# Keep this import light; it must not pull in the API.
from folio.common.settings import get_settings
from folio.database.core.main import Base, sqlalchemy_url
import folio.database.models  # noqa: F401  (registers tables on Base.metadata)

cfg = get_settings()

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

# Explicit sqlalchemy.url (tests, CLI -x) > DATABASE_URL > Settings
database_url = sqlalchemy_url(
    alembic_config.get_main_option("sqlalchemy.url")
    or os.getenv("DATABASE_URL")
    or cfg.database_url
)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no DB connection)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def _prepare_connection(conn: Connection) -> None:
    """Extensions the models rely on: pgvector for embeddings, pgcrypto for gen_random_uuid()."""
    conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))
    conn.commit()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with an Engine/Connection)."""
    connectable = create_engine(database_url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _prepare_connection(connection)

        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
