# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides in-memory doubles of the relational store and the
identity provider. Both keep real state, record every mutation, and can be
told to fail any (operation, collection) pair, so workflow tests assert on
what actually survived rather than on mocked calls.
"""

import inspect
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Mapping, Sequence

import pytest

from lscmis.core.config import clear_settings_cache
from lscmis.core.config.settings import ApplicationCodeSettings
from lscmis.infrastructure.database.connection import DatabaseError, IntegrityViolationError
from lscmis.infrastructure.identity.base import CredentialRecord, IdentityProviderError
from lscmis.infrastructure.store import (
    ROW_SCHEMAS,
    Collection,
    Filters,
    Predicate,
    StoreRow,
    normalize_filters,
)


# =============================================================================
# In-memory relational store
# =============================================================================


_UNIQUE: dict[Collection, list[tuple[str, ...]]] = {
    Collection.DISTRICTS: [("name",)],
    Collection.CENTERS: [("application_code",)],
    Collection.PROFILES: [("user_id",)],
    Collection.SERVICE_CATEGORIES: [("name",)],
    Collection.CENTER_SERVICES: [("lsc_id", "service_item_id")],
}

_DEFAULTS: dict[Collection, dict[str, Any]] = {
    Collection.CENTERS: {
        "is_active": False,
        "status": "PENDING",
        "has_building": False,
        "has_furniture": False,
        "application_code": None,
    },
    Collection.SERVICE_ITEMS: {"is_active": True},
    Collection.CENTER_SERVICES: {"is_available": True},
}

_BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _matches(row: Mapping[str, Any], predicate: Predicate) -> bool:
    value = row.get(predicate.column)
    if predicate.op == "eq":
        return value is None if predicate.value is None else value == predicate.value
    if predicate.op == "is_null":
        return value is None
    if value is None:
        return False
    if predicate.op == "gte":
        return value >= predicate.value
    if predicate.op == "lte":
        return value <= predicate.value
    if predicate.op == "in":
        return value in predicate.value
    raise AssertionError(f"Unknown operator {predicate.op}")


class InMemoryStore:
    """RelationalStore double with constraints, failure injection and a mutation log.

    Attributes:
        tables: Raw rows per collection.
        mutations: (operation, collection) for every successful write.
    """

    def __init__(self) -> None:
        self.tables: dict[Collection, list[dict[str, Any]]] = {c: [] for c in Collection}
        self.mutations: list[tuple[str, Collection]] = []
        self._failures: dict[tuple[str, Collection], tuple[Exception, bool]] = {}
        self._hooks: dict[tuple[str, Collection], Callable[[], Awaitable[None] | None]] = {}
        self._clock = 0

    # -- test controls --------------------------------------------------------

    def fail(
        self,
        operation: str,
        collection: Collection,
        error: Exception | None = None,
        once: bool = False,
    ) -> None:
        """Make every (or only the next) ``operation`` on ``collection`` raise."""
        error = error or DatabaseError(f"{operation} on {collection.value} failed")
        self._failures[(operation, collection)] = (error, once)

    def before(self, operation: str, collection: Collection, hook: Callable[[], Any]) -> None:
        """Run ``hook`` once, right before the next matching call."""
        self._hooks[(operation, collection)] = hook

    def seed(self, collection: Collection, **values: Any) -> StoreRow:
        """Insert a row without recording a mutation."""
        row = self._build(collection, values)
        self._check_unique(collection, row)
        self.tables[collection].append(row)
        return ROW_SCHEMAS[collection].model_validate(row)

    def rows(self, collection: Collection, **filters: Any) -> list[dict[str, Any]]:
        return [
            dict(row)
            for row in self.tables[collection]
            if all(row.get(k) == v for k, v in filters.items())
        ]

    # -- RelationalStore ------------------------------------------------------

    async def insert(self, collection: Collection, row: Mapping[str, Any]) -> StoreRow:
        return (await self.insert_many(collection, [row], operation="insert"))[0]

    async def insert_many(
        self,
        collection: Collection,
        rows: Sequence[Mapping[str, Any]],
        operation: str = "insert_many",
    ) -> list[StoreRow]:
        if not rows:
            return []
        await self._enter(operation, collection)

        built = [self._build(collection, dict(row)) for row in rows]
        staged = list(self.tables[collection])
        for row in built:
            self._check_unique(collection, row, staged)
            staged.append(row)
        result = [ROW_SCHEMAS[collection].model_validate(row) for row in built]

        self.tables[collection] = staged
        self.mutations.append((operation, collection))
        return result

    async def update(
        self, collection: Collection, patch: Mapping[str, Any], filters: Filters
    ) -> int:
        await self._enter("update", collection)
        predicates = normalize_filters(filters)
        assert predicates, "update without filter"

        matched = [row for row in self.tables[collection] if self._match(row, predicates)]
        for row in matched:
            row.update(self._plain(patch))
        self.mutations.append(("update", collection))
        return len(matched)

    async def delete(self, collection: Collection, filters: Filters) -> int:
        await self._enter("delete", collection)
        predicates = normalize_filters(filters)
        assert predicates, "delete without filter"

        before = len(self.tables[collection])
        self.tables[collection] = [
            row for row in self.tables[collection] if not self._match(row, predicates)
        ]
        self.mutations.append(("delete", collection))
        return before - len(self.tables[collection])

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
        await self._enter("select", collection)
        predicates = normalize_filters(filters)
        rows = [row for row in self.tables[collection] if self._match(row, predicates)]
        if order_by is not None:
            rows.sort(key=lambda row: row.get(order_by), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [ROW_SCHEMAS[collection].model_validate(row) for row in rows]

    async def count(self, collection: Collection, filters: Filters = None) -> int:
        await self._enter("count", collection)
        predicates = normalize_filters(filters)
        return sum(1 for row in self.tables[collection] if self._match(row, predicates))

    # -- helpers --------------------------------------------------------------

    async def _enter(self, operation: str, collection: Collection) -> None:
        hook = self._hooks.pop((operation, collection), None)
        if hook is not None:
            outcome = hook()
            if inspect.isawaitable(outcome):
                await outcome

        failure = self._failures.get((operation, collection))
        if failure is not None:
            error, once = failure
            if once:
                del self._failures[(operation, collection)]
            raise error

    def _build(self, collection: Collection, values: Mapping[str, Any]) -> dict[str, Any]:
        self._clock += 1
        row = {**_DEFAULTS.get(collection, {}), **self._plain(values)}
        if collection != Collection.PROFILES:
            row.setdefault("id", str(uuid.uuid4()))
        if collection in (Collection.CENTERS, Collection.SERVICE_TRANSACTIONS):
            row.setdefault("created_at", _BASE_TIME + timedelta(seconds=self._clock))
        return row

    def _check_unique(
        self,
        collection: Collection,
        row: Mapping[str, Any],
        existing: list[dict[str, Any]] | None = None,
    ) -> None:
        existing = self.tables[collection] if existing is None else existing
        for columns in _UNIQUE.get(collection, []):
            key = tuple(row.get(c) for c in columns)
            if any(v is None for v in key):
                continue
            if any(tuple(other.get(c) for c in columns) == key for other in existing):
                raise IntegrityViolationError(
                    f"insert on {collection.value} violated a constraint"
                )

    @staticmethod
    def _match(row: Mapping[str, Any], predicates: list[Predicate]) -> bool:
        return all(_matches(row, p) for p in predicates)

    @staticmethod
    def _plain(values: Mapping[str, Any]) -> dict[str, Any]:
        # Stored like a database would: enums as their values
        return {k: getattr(v, "value", v) for k, v in values.items()}


# =============================================================================
# In-memory identity provider
# =============================================================================


class InMemoryIdentityProvider:
    """IdentityProvider double.

    Attributes:
        credentials: Credentials by user ID.
        mutations: "create" / "delete" for every successful write.
    """

    def __init__(self) -> None:
        self.credentials: dict[str, CredentialRecord] = {}
        self.passwords: dict[str, str] = {}
        self.mutations: list[str] = []
        self._failures: dict[str, IdentityProviderError] = {}

    def fail(self, operation: str, error: IdentityProviderError | None = None) -> None:
        """Make ``create``, ``delete`` or ``list`` raise."""
        self._failures[operation] = error or IdentityProviderError(
            f"Identity provider {operation} failed", status_code=500
        )

    async def create_credential(
        self, email: str, password: str, email_confirmed: bool = True
    ) -> str:
        self._raise_if_failing("create")
        if any(c.email == email.lower() for c in self.credentials.values()):
            raise IdentityProviderError(
                "A user with this email address has already been registered",
                status_code=422,
            )
        user_id = str(uuid.uuid4())
        self.credentials[user_id] = CredentialRecord(id=user_id, email=email.lower())
        self.passwords[user_id] = password
        self.mutations.append("create")
        return user_id

    async def delete_credential(self, user_id: str) -> None:
        self._raise_if_failing("delete")
        if self.credentials.pop(user_id, None) is None:
            raise IdentityProviderError("User not found", status_code=404)
        self.passwords.pop(user_id, None)
        self.mutations.append("delete")

    async def list_credentials(self) -> list[CredentialRecord]:
        self._raise_if_failing("list")
        return list(self.credentials.values())

    def _raise_if_failing(self, operation: str) -> None:
        if operation in self._failures:
            raise self._failures[operation]


class ScriptedRandom:
    """Random source returning a fixed sequence of ``randrange`` results."""

    def __init__(self, values: Sequence[int]) -> None:
        self._values = list(values)

    def randrange(self, start: int, stop: int) -> int:
        value = self._values.pop(0)
        assert start <= value < stop
        return value


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def code_settings() -> ApplicationCodeSettings:
    return ApplicationCodeSettings(range_start=10000, range_end=90000, max_attempts=15)


@pytest.fixture
def scripted_random() -> type[ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture
def org(store: InMemoryStore) -> dict[str, StoreRow]:
    """A district with two blocks, a second district, and two service items."""
    district = store.seed(Collection.DISTRICTS, name="Ranchi")
    other_district = store.seed(Collection.DISTRICTS, name="Gumla")
    block = store.seed(Collection.BLOCKS, district_id=district.id, name="Kanke")
    other_block = store.seed(Collection.BLOCKS, district_id=other_district.id, name="Bishunpur")
    category = store.seed(Collection.SERVICE_CATEGORIES, name="Banking")
    item_a = store.seed(Collection.SERVICE_ITEMS, category_id=category.id, name="Cash withdrawal")
    item_b = store.seed(Collection.SERVICE_ITEMS, category_id=category.id, name="Account opening")
    return {
        "district": district,
        "other_district": other_district,
        "block": block,
        "other_block": other_block,
        "category": category,
        "item_a": item_a,
        "item_b": item_b,
    }


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; isolate each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires PostgreSQL)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
