"""
Document-style persistence boundary.

Resolvers only ever talk to a :class:`DocumentStore`: five CRUD calls over
named collections, with plain ``dict`` records in and out. The SQL
implementation opens one short-lived session per call, so concurrently
resolving fields never share a session.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import Conflict, NotFound
from app.db.base import Base
from app.models import Item, Order, User

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class DocumentStore(Protocol):
    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Record]: ...

    async def get(self, collection: str, id: str) -> Record | None: ...

    async def create(self, collection: str, data: dict[str, Any]) -> Record: ...

    async def patch(self, collection: str, id: str, data: dict[str, Any]) -> Record: ...

    async def remove(self, collection: str, id: str) -> Record: ...


COLLECTIONS: dict[str, type[Base]] = {
    "users": User,
    "items": Item,
    "orders": Order,
}


def _model(collection: str) -> type[Base]:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection '{collection}'") from None


def _to_record(row: Base) -> Record:
    return {attr.key: getattr(row, attr.key) for attr in row.__mapper__.column_attrs}


class SqlDocumentStore:
    """:class:`DocumentStore` backed by the SQLAlchemy models in ``app.models``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Record]:
        """Equality match on every filter key; list values match any member."""
        model = _model(collection)
        stmt = select(model)
        for key, value in (filters or {}).items():
            column = getattr(model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)
        stmt = stmt.order_by(model.created_at, model.id)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_to_record(row) for row in result.scalars().all()]

    async def get(self, collection: str, id: str) -> Record | None:
        async with self._session_factory() as session:
            row = await session.get(_model(collection), id)
            return _to_record(row) if row is not None else None

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        model = _model(collection)
        async with self._session_factory() as session:
            row = model(**data)
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                logger.info("Rejected %s insert: %s", collection, exc.orig)
                raise Conflict(f"Duplicate record in {collection}") from exc
            await session.refresh(row)
            return _to_record(row)

    async def patch(self, collection: str, id: str, data: dict[str, Any]) -> Record:
        async with self._session_factory() as session:
            row = await session.get(_model(collection), id)
            if row is None:
                raise NotFound(f"No record '{id}' in {collection}")
            for key, value in data.items():
                setattr(row, key, value)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise Conflict(f"Duplicate record in {collection}") from exc
            await session.refresh(row)
            return _to_record(row)

    async def remove(self, collection: str, id: str) -> Record:
        async with self._session_factory() as session:
            row = await session.get(_model(collection), id)
            if row is None:
                raise NotFound(f"No record '{id}' in {collection}")
            record = _to_record(row)
            await session.delete(row)
            await session.commit()
            return record
