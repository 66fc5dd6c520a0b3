# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Select the identity backend from settings."""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lscmis.domains.auth.password import PasswordHasher
from lscmis.infrastructure.identity.base import IdentityProvider
from lscmis.infrastructure.identity.database import DatabaseIdentityProvider
from lscmis.infrastructure.identity.gotrue import GoTrueIdentityProvider

if TYPE_CHECKING:
    from lscmis.core.config.settings import Settings


def build_identity_provider(
    settings: "Settings",
    sessionmaker: async_sessionmaker[AsyncSession],
) -> IdentityProvider:
    """Build the configured identity provider.

    Args:
        settings: Application settings.
        sessionmaker: Used by the database backend only.

    Returns:
        DatabaseIdentityProvider or GoTrueIdentityProvider.
    """
    identity = settings.identity
    if identity.backend == "gotrue":
        return GoTrueIdentityProvider(
            base_url=identity.url,
            service_role_key=identity.service_role_key.get_secret_value(),
            timeout=identity.timeout,
        )

    return DatabaseIdentityProvider(
        sessionmaker,
        hasher=PasswordHasher(rounds=identity.bcrypt_rounds),
        password_min_length=identity.password_min_length,
    )
