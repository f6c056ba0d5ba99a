"""Pytest configuration and shared fixtures for ngram-search.

Unit tests need nothing external. Repository tests run against in-memory
SQLite (see tests/integration/conftest.py); tests marked requires_db run
against PostgreSQL when DATABASE_URL is set.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ngram_search.application.services.ngram_config_cache import ngram_config_cache
from ngram_search.core.config import get_settings
from ngram_search.infrastructure.persistence import database
from ngram_search.infrastructure.persistence.dialects import PostgresDialect


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Fresh settings and an empty shared config cache for every test."""
    get_settings.cache_clear()
    ngram_config_cache.clear()
    yield
    get_settings.cache_clear()
    ngram_config_cache.clear()


@pytest.fixture
def dialect() -> PostgresDialect:
    return PostgresDialect()


@pytest.fixture
async def pg_session() -> AsyncSession:
    """PostgreSQL session with search functions installed. Rolls back after test.

    Skips (pytest.skip) when DATABASE_URL is not configured. Use
    @pytest.mark.requires_db on tests that need it; run without DB via:
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None or database.engine.dialect.name != "postgresql":
        pytest.skip("Postgres not configured: set DATABASE_URL=postgresql+asyncpg://...")
    async for session in database.get_db_transactional():
        await database.install_search_functions(await session.connection(), PostgresDialect())
    sessions = database.get_db()
    session = await anext(sessions)
    yield session
    await session.rollback()
    await sessions.aclose()
