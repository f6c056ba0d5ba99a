"""Repository test fixtures: in-memory SQLite with the search store functions.

PostgreSQL templates call FULL_TEXT_SEARCH, FULL_TEXT_SEARCH_RANK and
JSON_CONTAINS; here they are Python functions registered on each SQLite
connection, with the same contract as the PostgreSQL ones (1/0 results,
rank grows with the number of matching n-grams).
"""

import json

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ngram_search.infrastructure.persistence.database import Base

LENIENT_SEPARATOR = " OR "


def _query_terms(query: str | None) -> list[str]:
    return [t for t in (query or "").split(LENIENT_SEPARATOR) if t]


def full_text_search(data: str | None, query: str | None) -> int:
    stored = set((data or "").split())
    return int(any(term in stored for term in _query_terms(query)))


def full_text_search_rank(data: str | None, query: str | None) -> float:
    terms = _query_terms(query)
    if not terms:
        return 0.0
    stored = set((data or "").split())
    return sum(term in stored for term in terms) / len(terms)


def _contains(document, value) -> bool:
    """jsonb @> semantics: objects by key subset, arrays by element containment."""
    if isinstance(document, dict):
        return isinstance(value, dict) and all(
            k in document and _contains(document[k], v) for k, v in value.items()
        )
    if isinstance(document, list):
        if not isinstance(value, list):
            # top-level array contains a primitive
            return not isinstance(value, dict) and value in document
        return all(any(_contains(d, v) for d in document) for v in value)
    return document == value


def json_contains(data: str | None, value: str | None) -> int:
    if data is None or value is None:
        return 0
    return int(_contains(json.loads(data), json.loads(value)))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _register_search_functions(dbapi_connection, connection_record) -> None:
        dbapi_connection.create_function("full_text_search", 2, full_text_search)
        dbapi_connection.create_function("full_text_search_rank", 2, full_text_search_rank)
        dbapi_connection.create_function("json_contains", 2, json_contains)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncSession:
    """Session for repository tests. Rolls back after test."""
    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()
