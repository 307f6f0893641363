# folio/database/core/main.py
from __future__ import annotations

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from folio.common.settings import get_settings

_settings = get_settings()

# Embedding width of the document store; the vector column and every write are checked against it.
EMBEDDING_DIMENSIONS = 1536

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "%(table_name)s_%(column_0_name)s_unique",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}


class Base(DeclarativeBase):
    # No default schema: tables resolve through search_path
    # (public in production, "auth, test, public" under the test harness).
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def sqlalchemy_url(raw: str | URL) -> URL:
    """Parse a connection string, pinning bare postgres URLs to the psycopg (v3) driver."""
    url = make_url(raw)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername="postgresql+psycopg")
    return url


engine = create_engine(
    sqlalchemy_url(_settings.database_url),
    echo=_settings.db.echo,
    pool_size=_settings.db.pool_size,
    max_overflow=_settings.db.max_overflow,
    pool_pre_ping=_settings.db.pool_pre_ping,
    pool_recycle=_settings.db.pool_recycle,
)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
