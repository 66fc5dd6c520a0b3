# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for deleting accounts and listing officers.

Deletion removes the profile before the credential it references. If the
credential then cannot be deleted, the profile cannot be rebuilt (its role
and scope are gone), so the dangling credential is logged at CRITICAL for
out-of-band cleanup instead of being compensated.
"""

import logging

from lscmis.domains.errors import AuthError, NotFoundError
from lscmis.domains.validation import require
from lscmis.domains.workflow import translate_errors
from lscmis.infrastructure.identity import IdentityProvider, IdentityProviderError
from lscmis.infrastructure.store import Collection, RelationalStore, in_
from lscmis.models.common import Role, SuccessResponse
from lscmis.models.user import OfficerSummary

logger = logging.getLogger(__name__)


class UserService:
    """Service for account removal and the officer report."""

    def __init__(self, store: RelationalStore, identity: IdentityProvider) -> None:
        self._store = store
        self._identity = identity

    async def delete_user(self, user_id: str | None) -> SuccessResponse:
        """Delete a user's profile and then their credential.

        Args:
            user_id: ID shared by the credential and the profile.

        Raises:
            ValidationError: If user_id is missing.
            NotFoundError: If no profile exists. Nothing is deleted.
            StoreError: If the profile cannot be deleted.
            AuthError: If the credential cannot be deleted after the profile was.
        """
        require(user_id)

        with translate_errors():
            profile = await self._store.select_one(Collection.PROFILES, {"user_id": user_id})
            if profile is None:
                raise NotFoundError("User profile not found")
            await self._store.delete(Collection.PROFILES, {"user_id": user_id})

        try:
            await self._identity.delete_credential(user_id)
        except IdentityProviderError as e:
            logger.critical(
                "Dangling credential %s: profile (role=%s) deleted but credential "
                "deletion failed: %s",
                user_id,
                profile.role.value,
                e,
            )
            raise AuthError(e.message, details={"user_id": user_id}) from e

        logger.info("User deleted: %s role=%s", user_id, profile.role.value)
        return SuccessResponse(message="User deleted successfully")

    async def list_officers(self) -> list[OfficerSummary]:
        """List district and block officers with their e-mails and scope names."""
        with translate_errors():
            profiles = await self._store.select_many(
                Collection.PROFILES,
                [in_("role", [Role.DISTRICT.value, Role.BLOCK.value])],
            )
            if not profiles:
                return []

            credentials = await self._identity.list_credentials()

            district_ids = {p.district_id for p in profiles if p.district_id}
            block_ids = {p.block_id for p in profiles if p.block_id}
            districts = (
                await self._store.select_many(
                    Collection.DISTRICTS, [in_("id", sorted(district_ids))]
                )
                if district_ids
                else []
            )
            blocks = (
                await self._store.select_many(Collection.BLOCKS, [in_("id", sorted(block_ids))])
                if block_ids
                else []
            )

        emails = {credential.id: credential.email for credential in credentials}
        district_names = {district.id: district.name for district in districts}
        block_names = {block.id: block.name for block in blocks}

        return [
            OfficerSummary(
                user_id=profile.user_id,
                role=profile.role,
                email=emails.get(profile.user_id),
                district=district_names.get(profile.district_id),
                block=block_names.get(profile.block_id),
            )
            for profile in profiles
        ]
