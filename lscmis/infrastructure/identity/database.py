# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity backend that keeps bcrypt-hashed credentials in PostgreSQL.

Used when no external identity service is deployed. Credentials live in
their own table and are written in their own sessions, independent from
the relational store calls a workflow makes.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lscmis.domains.auth.password import PasswordHasher
from lscmis.infrastructure.database.models import Credential
from lscmis.infrastructure.identity.base import CredentialRecord, IdentityProviderError

logger = logging.getLogger(__name__)


class DatabaseIdentityProvider:
    """Identity provider backed by the ``credentials`` table.

    Attributes:
        _sessionmaker: Factory for per-call sessions.
        _hasher: bcrypt password hasher.
        _password_min_length: Shortest accepted password.
    """

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        hasher: PasswordHasher | None = None,
        password_min_length: int = 6,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._hasher = hasher or PasswordHasher()
        self._password_min_length = password_min_length

    async def create_credential(
        self, email: str, password: str, email_confirmed: bool = True
    ) -> str:
        """Create a credential.

        Args:
            email: Login e-mail, stored lowercased.
            password: Plain text password.
            email_confirmed: Whether the e-mail counts as verified.

        Returns:
            The new user id.

        Raises:
            IdentityProviderError: On a weak password, a duplicate e-mail
                or a database failure.
        """
        normalized = email.strip().lower()
        if len(password) < self._password_min_length:
            raise IdentityProviderError(
                f"Password should be at least {self._password_min_length} characters",
                status_code=422,
            )

        try:
            password_hash = await self._hasher.hash_async(password)
        except ValueError as e:
            raise IdentityProviderError(str(e), status_code=422) from e

        credential = Credential(
            email=normalized,
            password_hash=password_hash,
            confirmed=email_confirmed,
        )

        async with self._sessionmaker() as session:
            try:
                session.add(credential)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise IdentityProviderError(
                    "A user with this email address has already been registered",
                    status_code=422,
                ) from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Credential insert failed: %s", str(e))
                raise IdentityProviderError("Credential store unavailable", status_code=503) from e

        logger.info("Credential created: %s", credential.id)
        return credential.id

    async def delete_credential(self, user_id: str) -> None:
        """Delete a credential.

        Raises:
            IdentityProviderError: If the user does not exist or the delete fails.
        """
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(delete(Credential).where(Credential.id == user_id))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Credential delete failed: %s", str(e))
                raise IdentityProviderError("Credential store unavailable", status_code=503) from e

        if result.rowcount == 0:
            raise IdentityProviderError("User not found", status_code=404)

        logger.info("Credential deleted: %s", user_id)

    async def list_credentials(self) -> list[CredentialRecord]:
        """List every credential, oldest first."""
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(
                    select(Credential.id, Credential.email).order_by(Credential.created_at)
                )
            except SQLAlchemyError as e:
                raise IdentityProviderError("Credential store unavailable", status_code=503) from e

            return [CredentialRecord(id=row.id, email=row.email) for row in result.all()]
