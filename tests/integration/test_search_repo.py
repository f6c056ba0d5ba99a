"""SearchableRepository integration tests (write pipeline, filters, search, sort, paging).

Run against in-memory SQLite; tests marked requires_db run against PostgreSQL.
"""

from datetime import datetime
from typing import Any
from unittest.mock import Mock

import pytest
from sqlalchemy import JSON, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from ngram_search.application.services.ngram_service import NgramService
from ngram_search.application.services.search_data_assembler import SearchDataAssembler
from ngram_search.core.constants import SEARCH_RANK_PSEUDOFIELD
from ngram_search.domain.exceptions import (
    ConfigurationException,
    InvalidInputException,
    RecordNotFoundException,
)
from ngram_search.domain.value_objects import PaginationRequest, SortOrder
from ngram_search.infrastructure.persistence.database import Base
from ngram_search.infrastructure.persistence.dialects import PostgresDialect
from ngram_search.infrastructure.persistence.models import (
    CuidMixin,
    FullTextSearchMixin,
    TimestampMixin,
)
from ngram_search.infrastructure.persistence.repositories import SearchableRepository


class Article(CuidMixin, TimestampMixin, FullTextSearchMixin, Base):
    __tablename__ = "test_articles"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), default=list
    )

    def full_text_search_sources(self):
        return [lambda: self.title, lambda: self.body]


class Label(CuidMixin, Base):
    __tablename__ = "test_labels"

    name: Mapped[str] = mapped_column(String(100), nullable=False)


@pytest.fixture
def repo(db_session) -> SearchableRepository[Article]:
    return SearchableRepository(db_session, Article, PostgresDialect())


@pytest.fixture
async def articles(repo: SearchableRepository[Article]) -> dict[str, Article]:
    """Three articles, created a day apart (fox oldest, afternoon newest)."""
    fox = await repo.create(
        Article(
            title="Quick brown fox",
            body="Jumps over the lazy dog",
            tags=["animals", "classic"],
            created_at=datetime(2026, 1, 1, 9, 0),
        )
    )
    brownie = await repo.create(
        Article(
            title="Brownie recipe",
            body="Chocolate and butter",
            tags=["food"],
            created_at=datetime(2026, 1, 2, 9, 0),
        )
    )
    afternoon = await repo.create(
        Article(
            title="Lazy afternoon",
            body=None,
            tags=["life", "o'reilly"],
            created_at=datetime(2026, 1, 3, 9, 0),
        )
    )
    return {"fox": fox, "brownie": brownie, "afternoon": afternoon}


def _titles(page) -> list[str]:
    return [a.title for a in page.items]


class TestWritePipeline:
    async def test_create_fills_search_data(self, articles: dict[str, Article]) -> None:
        fox = articles["fox"]
        assert fox.full_text_search_data.startswith(
            "quick brown fox jumps over the lazy dog"
        )
        assert fox.full_text_search_data_checksum

    async def test_update_with_changed_text_rebuilds(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        fox = articles["fox"]
        old_checksum = fox.full_text_search_data_checksum

        fox.title = "Slow brown fox"
        updated = await repo.update(fox)

        assert updated.full_text_search_data_checksum != old_checksum
        assert "slow" in updated.full_text_search_data.split()
        assert "quick" not in updated.full_text_search_data.split()

    async def test_update_with_unchanged_text_skips_generation(self, db_session) -> None:
        ngram_service = Mock(wraps=NgramService())
        repo = SearchableRepository(
            db_session,
            Article,
            PostgresDialect(),
            assembler=SearchDataAssembler(ngram_service=ngram_service),
        )
        article = await repo.create(Article(title="Stable text", tags=[]))
        checksum = article.full_text_search_data_checksum

        article.tags = ["changed"]
        await repo.update(article)

        assert ngram_service.generate.call_count == 1
        assert article.full_text_search_data_checksum == checksum

    async def test_update_missing_record_raises(
        self, repo: SearchableRepository[Article]
    ) -> None:
        with pytest.raises(RecordNotFoundException):
            await repo.update(Article(id="missing", title="Nobody", tags=[]))


class TestCrud:
    async def test_get_by_id(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        fox = articles["fox"]
        assert await repo.get_by_id(fox.id) is fox
        assert await repo.get_by_id("missing") is None

    async def test_get_all_with_offset_and_limit(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        assert len(await repo.get_all()) == 3
        assert len(await repo.get_all(skip=1, limit=1)) == 1
        assert await repo.get_all(skip=3) == []

    async def test_delete(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        brownie = articles["brownie"]
        await repo.delete(brownie)

        assert await repo.get_by_id(brownie.id) is None
        page = await repo.find_by_filter(phrase="chocolate")
        assert page.total == 0


class TestFindByFilterSearch:
    async def test_phrase_matches_any_ngram(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(phrase="lazy")
        assert page.total == 2
        assert set(_titles(page)) == {"Quick brown fox", "Lazy afternoon"}

    async def test_default_sort_by_rank(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(phrase="brown fox")

        assert _titles(page) == ["Quick brown fox", "Brownie recipe"]
        assert page.pagination.sort == (SortOrder.desc(SEARCH_RANK_PSEUDOFIELD),)

    async def test_rank_asc_still_descending(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        requested = PaginationRequest.of(0, 10, SortOrder.asc(SEARCH_RANK_PSEUDOFIELD))
        page = await repo.find_by_filter(phrase="brown fox", pagination=requested)
        assert _titles(page) == ["Quick brown fox", "Brownie recipe"]

    async def test_caller_sort_kept_with_phrase(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        requested = PaginationRequest.of(0, 10, SortOrder.asc("title"))
        page = await repo.find_by_filter(phrase="brown fox", pagination=requested)

        assert _titles(page) == ["Brownie recipe", "Quick brown fox"]
        assert page.pagination == requested

    async def test_fuzzy_partial_word(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(phrase="choco")
        assert _titles(page) == ["Brownie recipe"]

    async def test_no_match(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(phrase="zebra")
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    @pytest.mark.parametrize("phrase", ["go", "a of"])
    async def test_only_short_words_match_nothing(
        self, repo: SearchableRepository[Article], articles: dict[str, Article], phrase: str
    ) -> None:
        page = await repo.find_by_filter(phrase=phrase, pagination=PaginationRequest.of(1, 5))

        assert page.items == []
        assert page.total == 0
        assert page.pagination == PaginationRequest.of(
            1, 5, SortOrder.desc(SEARCH_RANK_PSEUDOFIELD)
        )

    async def test_phrase_on_unsearchable_model_rejected(self, db_session) -> None:
        repo = SearchableRepository(db_session, Label, PostgresDialect())
        with pytest.raises(ConfigurationException):
            await repo.find_by_filter(phrase="anything")


class TestFindByFilterNoSearch:
    async def test_default_sort_newest_first(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter()

        assert _titles(page) == ["Lazy afternoon", "Brownie recipe", "Quick brown fox"]
        assert page.pagination.sort == (SortOrder.desc("created_at"),)

    async def test_blank_phrase_is_no_search(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(phrase="   ")
        assert page.total == 3

    async def test_paging(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(pagination=PaginationRequest.of(1, 2))

        assert _titles(page) == ["Quick brown fox"]
        assert page.total == 3
        assert page.total_pages == 2

    async def test_unpaged(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(pagination=PaginationRequest.unpaged())

        assert len(page.items) == 3
        assert not page.pagination.is_paged
        assert page.total_pages == 1

    async def test_unknown_sort_field_rejected(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        with pytest.raises(InvalidInputException):
            await repo.find_by_filter(
                pagination=PaginationRequest.of(0, 10, SortOrder.asc("nope"))
            )

    async def test_custom_default_sort_field(self, db_session) -> None:
        repo = SearchableRepository(
            db_session, Label, PostgresDialect(), default_sort_field="name"
        )
        await repo.create(Label(name="alpha"))
        await repo.create(Label(name="beta"))

        page = await repo.find_by_filter()

        assert [label.name for label in page.items] == ["beta", "alpha"]


class TestConditions:
    async def test_json_contains_scalar(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter([repo.json_contains("tags", "food")])
        assert _titles(page) == ["Brownie recipe"]

    async def test_json_contains_with_quote(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter([repo.json_contains("tags", "o'reilly")])
        assert _titles(page) == ["Lazy afternoon"]

    async def test_json_contains_array(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter([repo.json_contains("tags", ["classic", "animals"])])
        assert _titles(page) == ["Quick brown fox"]

    async def test_json_contains_bad_property(self, repo: SearchableRepository[Article]) -> None:
        with pytest.raises(InvalidInputException):
            repo.json_contains("tags; DROP TABLE test_articles", "x")

    async def test_conditions_combined_with_phrase(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        page = await repo.find_by_filter(
            [repo.json_contains("tags", "life")], phrase="lazy"
        )
        assert _titles(page) == ["Lazy afternoon"]
        assert page.total == 1

    async def test_and_if_helpers(
        self, repo: SearchableRepository[Article], articles: dict[str, Article]
    ) -> None:
        conditions: list[Any] = []
        repo.and_if_not_none(None, conditions, lambda v: Article.title == v)
        repo.and_if_not_blank("  ", conditions, lambda v: Article.title == v)
        repo.and_if_not_blank(None, conditions, lambda v: Article.title == v)
        assert conditions == []

        repo.and_if_not_none("food", conditions, lambda v: repo.json_contains("tags", v))
        repo.and_if_not_blank("Brownie recipe", conditions, lambda v: Article.title == v)
        page = await repo.find_by_filter(conditions)

        assert len(conditions) == 2
        assert _titles(page) == ["Brownie recipe"]


@pytest.mark.requires_db
async def test_postgres_search_by_rank(pg_session) -> None:
    """Full round trip on PostgreSQL: tsvector column, store functions, rank order."""
    connection = await pg_session.connection()
    await connection.run_sync(Base.metadata.create_all)
    repo = SearchableRepository(pg_session, Article, PostgresDialect())
    await repo.create(Article(title="Quick brown fox", body="Jumps", tags=["animals"]))
    await repo.create(Article(title="Brownie recipe", body="Chocolate", tags=["food"]))

    page = await repo.find_by_filter([repo.json_contains("tags", "animals")], phrase="brown")

    assert _titles(page) == ["Quick brown fox"]
    assert page.total == 1
