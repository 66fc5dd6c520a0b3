# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for the lscmis schema."""

from lscmis.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    new_id,
)
from lscmis.infrastructure.database.models.catalog import (
    CenterService,
    ServiceCategory,
    ServiceItem,
)
from lscmis.infrastructure.database.models.identity import Credential, Profile
from lscmis.infrastructure.database.models.organization import Block, Center, District
from lscmis.infrastructure.database.models.transaction import ServiceTransaction

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "new_id",
    # Organization
    "District",
    "Block",
    "Center",
    # Identity
    "Credential",
    "Profile",
    # Catalog
    "ServiceCategory",
    "ServiceItem",
    "CenterService",
    # Transactions
    "ServiceTransaction",
]
