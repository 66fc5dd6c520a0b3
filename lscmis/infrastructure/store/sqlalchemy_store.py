# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy implementation of the relational store.

Every method opens a fresh session, runs one statement (or one flush for
inserts) and commits, mirroring a hosted row-level API: what a call returns
has been committed, and a failed call has changed nothing.

Example:
    >>> store = SQLAlchemyStore(get_sessionmaker())
    >>> center = await store.insert(Collection.CENTERS, {"name": "Kendra 1"})
    >>> await store.count(Collection.CENTER_SERVICES, {"lsc_id": center.id})
    0
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Sequence

from pydantic import ValidationError as RowValidationError
from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lscmis.infrastructure.database.connection import DatabaseError, IntegrityViolationError
from lscmis.infrastructure.database.models import (
    Base,
    Block,
    Center,
    CenterService,
    District,
    Profile,
    ServiceCategory,
    ServiceItem,
    ServiceTransaction,
)
from lscmis.infrastructure.store.filters import Filters, Predicate, normalize_filters
from lscmis.infrastructure.store.schemas import ROW_SCHEMAS, Collection, StoreRow

logger = logging.getLogger(__name__)

_MODELS: dict[Collection, type[Base]] = {
    Collection.DISTRICTS: District,
    Collection.BLOCKS: Block,
    Collection.CENTERS: Center,
    Collection.PROFILES: Profile,
    Collection.SERVICE_CATEGORIES: ServiceCategory,
    Collection.SERVICE_ITEMS: ServiceItem,
    Collection.CENTER_SERVICES: CenterService,
    Collection.SERVICE_TRANSACTIONS: ServiceTransaction,
}


class SQLAlchemyStore:
    """Relational store backed by an async SQLAlchemy sessionmaker.

    Attributes:
        _sessionmaker: Factory for per-call sessions.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the store.

        Args:
            sessionmaker: Async sessionmaker bound to the lscmis database.
        """
        self._sessionmaker = sessionmaker

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert(self, collection: Collection, row: Mapping[str, Any]) -> StoreRow:
        model = self._model(collection)
        self._check_columns(collection, model, row.keys())

        async with self._unit(collection, "insert") as session:
            obj = model(**row)
            session.add(obj)
            await session.flush()
            result = self._to_row(collection, obj)

        logger.debug("Inserted into %s", collection.value)
        return result

    async def insert_many(
        self, collection: Collection, rows: Sequence[Mapping[str, Any]]
    ) -> list[StoreRow]:
        if not rows:
            return []

        model = self._model(collection)
        for row in rows:
            self._check_columns(collection, model, row.keys())

        async with self._unit(collection, "insert") as session:
            objects = [model(**row) for row in rows]
            session.add_all(objects)
            await session.flush()
            result = [self._to_row(collection, obj) for obj in objects]

        logger.debug("Inserted %d rows into %s", len(result), collection.value)
        return result

    async def update(
        self, collection: Collection, patch: Mapping[str, Any], filters: Filters
    ) -> int:
        model = self._model(collection)
        self._check_columns(collection, model, patch.keys())
        clauses = self._where(collection, model, filters)
        if not clauses:
            raise DatabaseError(f"Refusing to update {collection.value} without a filter")

        async with self._unit(collection, "update") as session:
            result = await session.execute(update(model).where(*clauses).values(**patch))
            return result.rowcount

    async def delete(self, collection: Collection, filters: Filters) -> int:
        model = self._model(collection)
        clauses = self._where(collection, model, filters)
        if not clauses:
            raise DatabaseError(f"Refusing to delete from {collection.value} without a filter")

        async with self._unit(collection, "delete") as session:
            result = await session.execute(delete(model).where(*clauses))
            return result.rowcount

    # =========================================================================
    # Reads
    # =========================================================================

    async def select_one(self, collection: Collection, filters: Filters) -> StoreRow | None:
        rows = await self.select_many(collection, filters, limit=1)
        return rows[0] if rows else None

    async def select_many(
        self,
        collection: Collection,
        filters: Filters = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoreRow]:
        model = self._model(collection)
        stmt = select(model).where(*self._where(collection, model, filters))

        if order_by is not None:
            column = self._column(collection, model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._unit(collection, "select") as session:
            result = await session.execute(stmt)
            return [self._to_row(collection, obj) for obj in result.scalars().all()]

    async def count(self, collection: Collection, filters: Filters = None) -> int:
        model = self._model(collection)
        stmt = (
            select(func.count())
            .select_from(model)
            .where(*self._where(collection, model, filters))
        )

        async with self._unit(collection, "count") as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    # =========================================================================
    # Helpers
    # =========================================================================

    @asynccontextmanager
    async def _unit(self, collection: Collection, action: str) -> AsyncIterator[AsyncSession]:
        """Run one committed unit of work, translating driver errors."""
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise IntegrityViolationError(
                    f"{action} on {collection.value} violated a constraint", e
                ) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"{action} on {collection.value} failed", e) from e

    @staticmethod
    def _model(collection: Collection) -> type[Base]:
        try:
            return _MODELS[Collection(collection)]
        except (KeyError, ValueError) as e:
            raise DatabaseError(f"Unknown collection: {collection}") from e

    @staticmethod
    def _column(collection: Collection, model: type[Base], name: str) -> Any:
        if name not in model.__table__.columns:
            raise DatabaseError(f"Unknown column {name!r} in {collection.value}")
        return getattr(model, name)

    def _check_columns(self, collection: Collection, model: type[Base], names: Any) -> None:
        for name in names:
            self._column(collection, model, name)

    def _where(
        self, collection: Collection, model: type[Base], filters: Filters
    ) -> list[ColumnElement[bool]]:
        return [
            self._clause(self._column(collection, model, p.column), p)
            for p in normalize_filters(filters)
        ]

    @staticmethod
    def _clause(column: Any, predicate: Predicate) -> ColumnElement[bool]:
        if predicate.op == "eq":
            if predicate.value is None:
                return column.is_(None)
            return column == predicate.value
        if predicate.op == "gte":
            return column >= predicate.value
        if predicate.op == "lte":
            return column <= predicate.value
        if predicate.op == "in":
            return column.in_(predicate.value)
        if predicate.op == "is_null":
            return column.is_(None)
        raise DatabaseError(f"Unsupported filter operator: {predicate.op}")

    @staticmethod
    def _to_row(collection: Collection, obj: Base) -> StoreRow:
        try:
            return ROW_SCHEMAS[collection].model_validate(obj)
        except RowValidationError as e:
            raise DatabaseError(f"Malformed row in {collection.value}", e) from e
