"""Shared data-access behaviour for the entity repositories.

Repositories receive the request's ``AsyncSession`` explicitly and never
commit: the unit of work is committed or rolled back by
``DatabaseSessionManager.get_session``. Absence is reported as ``None`` or
``False``; only store constraint violations raise.
"""

import logging
from typing import Any, List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class BaseRepository:
    """CRUD primitives keyed on the model's string primary key."""

    model: Any = None
    id_field: str = ""

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def id_column(self):
        return getattr(self.model, self.id_field)

    async def _flush(self) -> None:
        """Flush pending changes, translating constraint violations.

        The session is rolled back first so it stays usable for the caller.
        """
        try:
            await self.db.flush()
        except IntegrityError as ie:
            await self.db.rollback()
            error_msg = str(ie.orig).lower()
            entity = self.model.__name__

            if "unique" in error_msg or "duplicate" in error_msg:
                logger.warning(f"Unique constraint rejected {entity} write: {error_msg}")
                raise ConflictError(f"{entity} already exists") from ie
            if "foreign key" in error_msg:
                logger.warning(f"Foreign key rejected {entity} write: {error_msg}")
                raise NotFoundError(f"{entity} references an entity that does not exist") from ie
            raise

    async def create(self, entity):
        self.db.add(entity)
        await self._flush()
        return entity

    async def update(self, entity):
        """Persist changes to an existing row; None if the row is gone."""
        existing = await self.get_by_id(getattr(entity, self.id_field))
        if existing is None:
            return None
        if existing is not entity:
            entity = await self.db.merge(entity)
        await self._flush()
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Delete by id with a single DELETE so the store cascades dependents."""
        result = await self.db.execute(
            delete(self.model).where(self.id_column == entity_id)
        )
        return result.rowcount > 0

    async def get_by_id(self, entity_id: str):
        result = await self.db.execute(
            select(self.model).where(self.id_column == entity_id)
        )
        return result.scalar_one_or_none()

    async def _all(self, query) -> List[Any]:
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _exists(self, query) -> bool:
        result = await self.db.execute(query.limit(1))
        return result.first() is not None


__all__ = ["BaseRepository"]
