"""Document-store facade over async SQLAlchemy.

Gives the record routes a small, collection-style interface — insert,
find, find_one, find_by_id, find_by_id_and_update, find_by_id_and_delete —
so services don't build queries by hand. Filters are plain
``{column: value}`` dicts matched by equality.
"""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class DocumentStore(Generic[ModelT]):
    """CRUD by id and by equality filter for one model."""

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model

    async def insert(self, **fields: Any) -> ModelT:
        doc = self.model(**fields)
        self.db.add(doc)
        await self.db.commit()
        await self.db.refresh(doc)
        return doc

    async def find(
        self,
        filter: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> list[ModelT]:
        q = select(self.model).filter_by(**(filter or {}))
        if order_by:
            q = q.order_by(getattr(self.model, order_by))
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def find_one(self, filter: dict[str, Any]) -> Optional[ModelT]:
        q = select(self.model).filter_by(**filter).limit(1)
        result = await self.db.execute(q)
        return result.scalars().first()

    async def find_by_id(self, doc_id: Any) -> Optional[ModelT]:
        return await self.db.get(self.model, doc_id)

    async def find_by_id_and_update(
        self, doc_id: Any, fields: dict[str, Any]
    ) -> Optional[ModelT]:
        """Apply ``fields`` and return the updated document (None if absent)."""
        doc = await self.db.get(self.model, doc_id)
        if not doc:
            return None
        for name, value in fields.items():
            setattr(doc, name, value)
        await self.db.commit()
        await self.db.refresh(doc)
        return doc

    async def find_by_id_and_delete(self, doc_id: Any) -> Optional[ModelT]:
        """Delete and return the document (None if it was already gone)."""
        doc = await self.db.get(self.model, doc_id)
        if not doc:
            return None
        await self.db.delete(doc)
        await self.db.commit()
        return doc
