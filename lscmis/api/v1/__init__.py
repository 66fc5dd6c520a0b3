# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    admin: Provisioning, accounts and application review.
    public: Self-registration, status lookup and credential issuance.
    catalog: Service categories, items, districts and blocks.
    transactions: Per-center service transactions.
"""

from fastapi import APIRouter

from lscmis.api.v1 import admin, catalog, public, transactions

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(admin.router, prefix="/admin", tags=["Admin"])
router.include_router(public.router, prefix="/public", tags=["Public"])
router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
router.include_router(transactions.router, prefix="/centers", tags=["Transactions"])

__all__ = ["router"]
