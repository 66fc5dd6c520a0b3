# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Relational store interface consumed by the workflows.

Each call is its own committed unit. Workflows never see a transaction that
spans several calls; multi-step consistency is their job (see
lscmis.domains.workflow).
"""

from typing import Any, Mapping, Protocol, Sequence

from lscmis.infrastructure.store.filters import Filters
from lscmis.infrastructure.store.schemas import Collection, StoreRow


class RelationalStore(Protocol):
    """Generic insert/update/delete/select access to named collections.

    Implementations raise DatabaseError (or IntegrityViolationError) from
    lscmis.infrastructure.database on any failure.
    """

    async def insert(self, collection: Collection, row: Mapping[str, Any]) -> StoreRow:
        """Insert one row and return it as stored."""
        ...

    async def insert_many(
        self, collection: Collection, rows: Sequence[Mapping[str, Any]]
    ) -> list[StoreRow]:
        """Insert several rows in one statement: all commit or none do."""
        ...

    async def update(
        self, collection: Collection, patch: Mapping[str, Any], filters: Filters
    ) -> int:
        """Apply ``patch`` to matching rows and return how many matched."""
        ...

    async def delete(self, collection: Collection, filters: Filters) -> int:
        """Delete matching rows and return how many were removed."""
        ...

    async def select_one(self, collection: Collection, filters: Filters) -> StoreRow | None:
        """Return the first matching row, or None."""
        ...

    async def select_many(
        self,
        collection: Collection,
        filters: Filters = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoreRow]:
        """Return all matching rows."""
        ...

    async def count(self, collection: Collection, filters: Filters = None) -> int:
        """Count matching rows."""
        ...
