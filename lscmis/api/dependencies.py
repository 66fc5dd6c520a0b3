# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

The store and the identity provider are built once at startup and handed
to each service per request. Tests replace them through
``app.dependency_overrides[get_store]`` and
``app.dependency_overrides[get_identity_provider]``.

Example:
    @router.post("/create-lsc")
    async def create_lsc(
        service: ProvisioningService = Depends(get_provisioning_service),
    ):
        ...
"""

import logging

from fastapi import Depends, HTTPException, status

from lscmis.core.config import Settings, get_settings
from lscmis.domains.application import ApplicationCodeGenerator, ApplicationService
from lscmis.domains.catalog import CatalogService
from lscmis.domains.provisioning import ProvisioningService
from lscmis.domains.transaction import TransactionService
from lscmis.domains.user import UserService
from lscmis.infrastructure.database import close_database, get_sessionmaker, init_database
from lscmis.infrastructure.identity import (
    GoTrueIdentityProvider,
    IdentityProvider,
    build_identity_provider,
)
from lscmis.infrastructure.store import RelationalStore, SQLAlchemyStore

logger = logging.getLogger(__name__)

# Process-wide clients, created in init_clients()
_store: RelationalStore | None = None
_identity: IdentityProvider | None = None


async def init_clients(settings: Settings) -> None:
    """Initialize the database pool, the store and the identity provider."""
    global _store, _identity

    await init_database(settings)
    sessionmaker = get_sessionmaker()
    _store = SQLAlchemyStore(sessionmaker)
    _identity = build_identity_provider(settings, sessionmaker)
    logger.info("Identity backend: %s", settings.identity.backend)


async def close_clients() -> None:
    """Release the identity client and the database pool."""
    global _store, _identity

    if isinstance(_identity, GoTrueIdentityProvider):
        await _identity.aclose()
    _identity = None
    _store = None
    await close_database()


def get_store() -> RelationalStore:
    """Get the relational store.

    Raises:
        HTTPException: If the store was not initialized.
    """
    if _store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store not initialized",
        )
    return _store


def get_identity_provider() -> IdentityProvider:
    """Get the identity provider.

    Raises:
        HTTPException: If the provider was not initialized.
    """
    if _identity is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Identity provider not initialized",
        )
    return _identity


# =========================================================================
# Service Dependencies
# =========================================================================


def get_provisioning_service(
    store: RelationalStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
) -> ProvisioningService:
    return ProvisioningService(
        store, identity, password_min_length=settings.identity.password_min_length
    )


def get_application_service(
    store: RelationalStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider),
    settings: Settings = Depends(get_settings),
) -> ApplicationService:
    return ApplicationService(
        store,
        identity,
        ApplicationCodeGenerator(store, settings.application_code),
        password_min_length=settings.identity.password_min_length,
    )


def get_user_service(
    store: RelationalStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> UserService:
    return UserService(store, identity)


def get_catalog_service(store: RelationalStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_transaction_service(store: RelationalStore = Depends(get_store)) -> TransactionService:
    return TransactionService(store)
