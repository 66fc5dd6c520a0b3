# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider clients.

- DatabaseIdentityProvider: bcrypt credentials in the lscmis database
- GoTrueIdentityProvider: remote GoTrue-compatible admin API over httpx
"""

from lscmis.infrastructure.identity.base import (
    CredentialRecord,
    IdentityProvider,
    IdentityProviderError,
)
from lscmis.infrastructure.identity.database import DatabaseIdentityProvider
from lscmis.infrastructure.identity.factory import build_identity_provider
from lscmis.infrastructure.identity.gotrue import GoTrueIdentityProvider

__all__ = [
    "CredentialRecord",
    "IdentityProvider",
    "IdentityProviderError",
    "DatabaseIdentityProvider",
    "GoTrueIdentityProvider",
    "build_identity_provider",
]
