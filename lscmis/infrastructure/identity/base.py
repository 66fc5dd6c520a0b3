# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider interface.

The identity provider owns login credentials. Workflows only create and
delete them; everything else about authentication is the provider's job.
"""

from dataclasses import dataclass
from typing import Protocol


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects or fails a request.

    Attributes:
        message: Provider message, safe to show to the caller.
        status_code: HTTP-style status reported by the provider, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class CredentialRecord:
    """Minimal view of a credential held by the provider."""

    id: str
    email: str | None


class IdentityProvider(Protocol):
    """Create, delete and list login credentials."""

    async def create_credential(
        self, email: str, password: str, email_confirmed: bool = True
    ) -> str:
        """Create a credential and return its user id."""
        ...

    async def delete_credential(self, user_id: str) -> None:
        """Delete the credential with the given user id."""
        ...

    async def list_credentials(self) -> list[CredentialRecord]:
        """List every credential."""
        ...
