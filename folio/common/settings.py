# folio/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "folio"
    user: str = "folio"
    password: str = "folio"
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class EmbeddingConfig(BaseModel):
    base_url: str = "https://api.openai.com/v1"
    model: str = "text-embedding-ada-002"
    dimensions: int = 1536
    timeout_sec: float = 30.0


class HarnessConfig(BaseModel):
    """Knobs for the isolated per-test database (see folio.database.testing)."""

    application_name: str = "test-pool"
    pool_size: int = Field(1, ge=1)
    statement_timeout_ms: int = Field(30_000, ge=1)
    teardown_grace_sec: float = Field(3.0, ge=0)
    teardown_timeout_sec: float = Field(15.0, gt=0)
    deadlock_min_backoff_sec: float = Field(0.01, gt=0)
    deadlock_max_backoff_sec: float = Field(1.0, gt=0)
    deadlock_max_attempts: int = Field(100, ge=1)
    deadlock_max_elapsed_sec: float = Field(120.0, gt=0)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "folio"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    embeddings: EmbeddingConfig = EmbeddingConfig()
    test_db: HarnessConfig = HarnessConfig()

    # Optional single URLs (if set, they take precedence over the db block)
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    test_database_url: Optional[str] = Field(default=None, alias="TEST_DATABASE_URL")

    # -------- External services --------
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")

    # -------- Alembic / migrations --------
    alembic_script_location: str = "folio/database/alembic"

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = True
    test_db_image: str = "pgvector/pgvector:pg16"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.database_url_override or self.db.effective_url

    @property
    def is_test_env(self) -> bool:
        return self.app_env.lower() == "test"

    def harness_url(self) -> str:
        """
        Connection string for the per-test database.
        TEST_DATABASE_URL wins; DATABASE_URL is accepted as a fallback.
        """
        url = self.test_database_url or self.database_url_override
        if not url:
            raise RuntimeError(
                "Missing required environment variable: TEST_DATABASE_URL\n"
                "    Set TEST_DATABASE_URL (or DATABASE_URL) in the environment or .env, "
                "or enable USE_TESTCONTAINERS to start a throwaway Postgres."
            )
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from folio.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()
