"""Base repository: generic async CRUD with write-pipeline hooks."""

from typing import Any, Generic, TypeVar

from sqlalchemy import and_, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from ngram_search.domain.exceptions import RecordNotFoundException
from ngram_search.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, update, delete and hooks.

    _on_before_write runs on every create and update right before the flush,
    on the instance that is about to be written. Subclasses extend it (and
    _on_after_create, _on_after_update, _on_before_delete) to add stages.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with offset/limit pagination."""
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Run write hooks, persist a new record, then run _on_after_create."""
        await self._on_before_write(obj)
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Update an existing record (merge if detached) and run hooks.

        Raises:
            ValueError: If a primary key attribute is missing.
            RecordNotFoundException: If obj is detached and no row exists for its key.
        """
        mapper = sa_inspect(self.model)
        pk_attrs = mapper.primary_key
        for col in pk_attrs:
            if getattr(obj, col.key) is None:
                raise ValueError(
                    f"Cannot update: primary key '{col.key}' is missing on "
                    f"{self.model.__name__} instance."
                )
        if object_session(obj) is not self.db.sync_session:
            model: Any = self.model
            stmt = select(self.model).where(
                and_(*(getattr(model, c.key) == getattr(obj, c.key) for c in pk_attrs))
            )
            result = await self.db.execute(stmt)
            if result.scalar_one_or_none() is None:
                pk_str = ",".join(str(getattr(obj, c.key)) for c in pk_attrs)
                raise RecordNotFoundException(self.model.__name__, pk_str)
            obj = await self.db.merge(obj)
        await self._on_before_write(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    async def _on_before_write(self, obj: ModelType) -> None:
        """Override in subclasses to derive columns before insert or update."""

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches or emit events."""
