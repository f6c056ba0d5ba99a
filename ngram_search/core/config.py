"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated when get_settings() is first called.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_SQL_DIALECTS = ("postgres",)


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Only sql_dialect is validated; the database URL is checked lazily when
    an engine is first requested.
    """

    # App
    app_name: str = "ngram-search"
    debug: bool = False

    # Database
    sql_dialect: str = "postgres"
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Search
    max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_dialect_and_limits(self) -> "Settings":
        """Reject unknown SQL dialects and non-positive page limits."""
        self.sql_dialect = self.sql_dialect.lower()
        if self.sql_dialect not in SUPPORTED_SQL_DIALECTS:
            raise ValueError(
                f"sql_dialect must be one of {SUPPORTED_SQL_DIALECTS}, got: {self.sql_dialect!r}"
            )
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
