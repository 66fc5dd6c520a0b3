# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provisioning service for admin-created centers and officer accounts.

Each operation spans the identity provider and several store collections.
The store commits every call on its own, so each operation runs as a saga
whose compensations remove what was already created:

    provision_center: credential -> center -> profile -> services
    create_user:      credential -> profile
    update_center:    details -> clear services -> insert services

Either everything is in place when the call returns, or nothing it created
survives (barring a failed compensation, which is logged as a rollback
failure).
"""

import logging
from typing import Any, Sequence

from lscmis.domains.errors import NotFoundError, ValidationError
from lscmis.domains.validation import (
    check_contact,
    check_password,
    check_scope,
    check_service_items,
    require,
    unique_ids,
)
from lscmis.domains.workflow import Saga, SagaContext, translate_errors
from lscmis.infrastructure.identity import IdentityProvider
from lscmis.infrastructure.store import CenterRow, Collection, RelationalStore
from lscmis.models.center import CenterCreateResponse, CenterFields
from lscmis.models.common import CenterStatus, Role, SuccessResponse
from lscmis.models.user import UserCreateResponse

logger = logging.getLogger(__name__)

OFFICER_ROLES = (Role.ADMIN, Role.DISTRICT, Role.BLOCK)


class ProvisioningService:
    """Service for creating centers and accounts as one logical unit.

    Attributes:
        _store: Relational store.
        _identity: Identity provider holding login credentials.
        _password_min_length: Minimum password length for new accounts.
    """

    def __init__(
        self,
        store: RelationalStore,
        identity: IdentityProvider,
        password_min_length: int = 6,
    ) -> None:
        self._store = store
        self._identity = identity
        self._password_min_length = password_min_length

    # =========================================================================
    # Center provisioning
    # =========================================================================

    async def provision_center(
        self,
        email: str | None,
        password: str | None,
        fields: CenterFields,
        service_item_ids: Sequence[str],
    ) -> CenterCreateResponse:
        """Create an approved center together with its operator account.

        Args:
            email: Operator login e-mail.
            password: Operator password.
            fields: Center details.
            service_item_ids: Services offered by the center. At least one.

        Returns:
            Response carrying the new center's ID.

        Raises:
            ValidationError: If input is missing or invalid. Nothing is created.
            AuthError: If the identity provider refuses the credential.
            StoreError: If a store step fails. Everything created is removed.
        """
        require(email, password, fields.name)
        item_ids = unique_ids(service_item_ids)
        if not item_ids:
            raise ValidationError("No services selected")
        check_password(password, self._password_min_length)
        if fields.district_id is None or fields.block_id is None:
            raise ValidationError("District and block are required")
        check_contact(fields.contact_details)
        await check_scope(self._store, fields.district_id, fields.block_id)
        await check_service_items(self._store, item_ids)

        email = email.strip()
        row = {
            **fields.to_row(),
            "status": CenterStatus.APPROVED.value,
            "is_active": True,
            "application_code": None,
        }

        async def create_credential(ctx: SagaContext) -> str:
            return await self._identity.create_credential(email, password, email_confirmed=True)

        async def delete_credential(ctx: SagaContext) -> None:
            await self._identity.delete_credential(ctx["credential"])

        async def insert_center(ctx: SagaContext) -> CenterRow:
            return await self._store.insert(Collection.CENTERS, row)

        async def delete_center(ctx: SagaContext) -> None:
            await self._store.delete(Collection.CENTERS, {"id": ctx["center"].id})

        async def insert_profile(ctx: SagaContext) -> None:
            await self._store.insert(
                Collection.PROFILES,
                {
                    "user_id": ctx["credential"],
                    "role": Role.LSC.value,
                    "lsc_id": ctx["center"].id,
                },
            )

        async def delete_profile(ctx: SagaContext) -> None:
            await self._store.delete(Collection.PROFILES, {"user_id": ctx["credential"]})

        async def insert_associations(ctx: SagaContext) -> None:
            await self._store.insert_many(
                Collection.CENTER_SERVICES,
                _association_rows(ctx["center"].id, item_ids),
            )

        saga = Saga("provision_center")
        saga.step("credential", create_credential, compensation=delete_credential)
        saga.step("center", insert_center, compensation=delete_center)
        saga.step("profile", insert_profile, compensation=delete_profile)
        saga.step("associations", insert_associations)
        result = await saga.run()

        center_id = result.context["center"].id
        logger.info(
            "Center provisioned: center=%s operator=%s services=%d",
            center_id,
            result.context["credential"],
            len(item_ids),
        )
        return CenterCreateResponse(center_id=center_id)

    # =========================================================================
    # Officer accounts
    # =========================================================================

    async def create_user(
        self,
        email: str | None,
        password: str | None,
        role: Role | None,
        district_id: str | None = None,
        block_id: str | None = None,
    ) -> UserCreateResponse:
        """Create an ADMIN, DISTRICT or BLOCK account.

        Only the scope column matching the role is stored. A BLOCK officer
        also records the district the block belongs to.

        Raises:
            ValidationError: If input is missing, the role is not an officer
                role, or the scope does not exist.
            AuthError: If the identity provider refuses the credential.
            StoreError: If the profile insert fails; the credential is removed.
        """
        require(email, password, role)
        if role not in OFFICER_ROLES:
            raise ValidationError("Role must be ADMIN, DISTRICT or BLOCK")
        check_password(password, self._password_min_length)

        profile: dict[str, Any] = {
            "role": role.value,
            "district_id": None,
            "block_id": None,
            "lsc_id": None,
        }
        if role == Role.DISTRICT:
            require(district_id)
            await check_scope(self._store, district_id, None)
            profile["district_id"] = district_id
        elif role == Role.BLOCK:
            require(block_id)
            with translate_errors():
                block = await self._store.select_one(Collection.BLOCKS, {"id": block_id})
            if block is None:
                raise ValidationError("Unknown block")
            profile["district_id"] = block.district_id
            profile["block_id"] = block_id

        email = email.strip()

        async def create_credential(ctx: SagaContext) -> str:
            return await self._identity.create_credential(email, password, email_confirmed=True)

        async def delete_credential(ctx: SagaContext) -> None:
            await self._identity.delete_credential(ctx["credential"])

        async def insert_profile(ctx: SagaContext) -> None:
            await self._store.insert(
                Collection.PROFILES, {**profile, "user_id": ctx["credential"]}
            )

        saga = Saga("create_user")
        saga.step("credential", create_credential, compensation=delete_credential)
        saga.step("profile", insert_profile)
        result = await saga.run()

        user_id = result.context["credential"]
        logger.info("User created: %s role=%s", user_id, role.value)
        return UserCreateResponse(user_id=user_id)

    # =========================================================================
    # Center updates
    # =========================================================================

    async def update_center(
        self,
        center_id: str | None,
        fields: CenterFields,
        service_item_ids: Sequence[str],
    ) -> SuccessResponse:
        """Update center details and replace its service set.

        Associations are replaced wholesale. If the new set cannot be
        written, the previous set and the previous details are restored.

        Args:
            center_id: Center to update.
            fields: Changed details; only fields sent by the caller apply.
            service_item_ids: The complete new service set. May be empty.

        Raises:
            ValidationError: If input is invalid.
            NotFoundError: If the center does not exist.
            StoreError: If a store step fails.
        """
        require(center_id)
        patch = fields.to_row(partial=True)
        if "name" in patch:
            require(patch["name"])
        check_contact(patch.get("contact_details"))
        item_ids = unique_ids(service_item_ids)

        with translate_errors():
            current = await self._store.select_one(Collection.CENTERS, {"id": center_id})
            if current is None:
                raise NotFoundError("Center not found")
            previous_services = await self._store.select_many(
                Collection.CENTER_SERVICES, {"lsc_id": center_id}
            )

        district_id = patch.get("district_id", current.district_id)
        block_id = patch.get("block_id", current.block_id)
        if "district_id" in patch or "block_id" in patch:
            await check_scope(self._store, district_id, block_id)
        await check_service_items(self._store, item_ids)

        previous_details = {column: getattr(current, column) for column in patch}

        async def update_details(ctx: SagaContext) -> None:
            if patch:
                await self._store.update(Collection.CENTERS, patch, {"id": center_id})

        async def restore_details(ctx: SagaContext) -> None:
            if previous_details:
                await self._store.update(
                    Collection.CENTERS, previous_details, {"id": center_id}
                )

        async def clear_associations(ctx: SagaContext) -> int:
            return await self._store.delete(Collection.CENTER_SERVICES, {"lsc_id": center_id})

        async def restore_associations(ctx: SagaContext) -> None:
            await self._store.insert_many(
                Collection.CENTER_SERVICES,
                [
                    {
                        "lsc_id": center_id,
                        "service_item_id": service.service_item_id,
                        "is_available": service.is_available,
                    }
                    for service in previous_services
                ],
            )

        async def insert_associations(ctx: SagaContext) -> None:
            await self._store.insert_many(
                Collection.CENTER_SERVICES, _association_rows(center_id, item_ids)
            )

        saga = Saga("update_center")
        saga.step("details", update_details, compensation=restore_details)
        saga.step("cleared", clear_associations, compensation=restore_associations)
        saga.step("associations", insert_associations)
        await saga.run()

        logger.info("Center updated: %s services=%d", center_id, len(item_ids))
        return SuccessResponse()


def _association_rows(center_id: str, item_ids: Sequence[str]) -> list[dict[str, Any]]:
    return [
        {"lsc_id": center_id, "service_item_id": item_id, "is_available": True}
        for item_id in item_ids
    ]
