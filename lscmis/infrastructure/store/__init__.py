# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Relational store client.

Workflows depend on the RelationalStore protocol only; SQLAlchemyStore is
the production implementation.
"""

from lscmis.infrastructure.store.base import RelationalStore
from lscmis.infrastructure.store.filters import (
    Filters,
    Predicate,
    eq,
    gte,
    in_,
    is_null,
    lte,
    normalize_filters,
)
from lscmis.infrastructure.store.schemas import (
    ROW_SCHEMAS,
    BlockRow,
    CenterRow,
    CenterServiceRow,
    Collection,
    DistrictRow,
    ProfileRow,
    ServiceCategoryRow,
    ServiceItemRow,
    ServiceTransactionRow,
    StoreRow,
)
from lscmis.infrastructure.store.sqlalchemy_store import SQLAlchemyStore

__all__ = [
    "RelationalStore",
    "SQLAlchemyStore",
    # Filters
    "Filters",
    "Predicate",
    "eq",
    "gte",
    "lte",
    "in_",
    "is_null",
    "normalize_filters",
    # Rows
    "Collection",
    "ROW_SCHEMAS",
    "StoreRow",
    "DistrictRow",
    "BlockRow",
    "CenterRow",
    "ProfileRow",
    "ServiceCategoryRow",
    "ServiceItemRow",
    "CenterServiceRow",
    "ServiceTransactionRow",
]
