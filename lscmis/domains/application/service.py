# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application lifecycle service.

Public self-registration of a center, admin review, and issuance of the
operator credential once the application is approved.

States:
    PENDING -> APPROVED -> credentials issued (application code cleared)
    PENDING -> REJECTED

Nothing leaves REJECTED, and an approved center whose code has been
consumed accepts no further credential requests.

Example:
    service = ApplicationService(store, identity, codes)
    submitted = await service.submit_application(fields, ["item-1"])
    await service.review_application(submitted.center_id, CenterStatus.APPROVED)
    await service.issue_credentials(
        "op@example.org", "secret123", submitted.center_id, submitted.application_code
    )
"""

import logging
from contextlib import aclosing
from typing import Sequence

from lscmis.domains.application.codes import ApplicationCodeGenerator
from lscmis.domains.errors import (
    CodeGenerationError,
    InvalidTransitionError,
    NotFoundError,
    StaleCodeError,
    ValidationError,
)
from lscmis.domains.validation import (
    check_contact,
    check_password,
    check_scope,
    check_service_items,
    require,
    unique_ids,
)
from lscmis.domains.workflow import Saga, SagaContext, translate_errors
from lscmis.infrastructure.database.connection import IntegrityViolationError
from lscmis.infrastructure.identity import IdentityProvider
from lscmis.infrastructure.store import CenterRow, Collection, RelationalStore
from lscmis.models.application import (
    ApplicationReviewResponse,
    ApplicationStatusResponse,
    ApplicationSubmitResponse,
    ApplicationSummary,
)
from lscmis.models.center import CenterFields
from lscmis.models.common import CenterStatus, Role, SuccessResponse

logger = logging.getLogger(__name__)


class ApplicationService:
    """Service for the center application lifecycle.

    Attributes:
        _store: Relational store.
        _identity: Identity provider holding login credentials.
        _codes: Application code generator.
        _password_min_length: Minimum operator password length.
    """

    def __init__(
        self,
        store: RelationalStore,
        identity: IdentityProvider,
        codes: ApplicationCodeGenerator,
        password_min_length: int = 6,
    ) -> None:
        self._store = store
        self._identity = identity
        self._codes = codes
        self._password_min_length = password_min_length

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit_application(
        self,
        fields: CenterFields,
        service_item_ids: Sequence[str] = (),
    ) -> ApplicationSubmitResponse:
        """Record a pending center with a fresh application code.

        Args:
            fields: Center details from the registration form.
            service_item_ids: Services the center intends to offer.

        Returns:
            The pending center's ID and its application code.

        Raises:
            ValidationError: If the name is missing or details are invalid.
            CodeGenerationError: If no free code was found.
            StoreError: If the store fails; the center is removed again.
        """
        require(fields.name)
        check_contact(fields.contact_details)
        item_ids = unique_ids(service_item_ids)
        await check_scope(self._store, fields.district_id, fields.block_id)
        await check_service_items(self._store, item_ids)

        row = fields.to_row()

        async def insert_center(ctx: SagaContext) -> CenterRow:
            async with aclosing(self._codes.free_codes()) as codes:
                async for code in codes:
                    try:
                        return await self._store.insert(
                            Collection.CENTERS,
                            {
                                **row,
                                "status": CenterStatus.PENDING.value,
                                "is_active": False,
                                "application_code": code,
                            },
                        )
                    except IntegrityViolationError:
                        # Only a lost race on the code is worth another draw
                        if not await self._store.count(
                            Collection.CENTERS, {"application_code": code}
                        ):
                            raise
                        logger.info("Application code was claimed concurrently, drawing again")
            raise CodeGenerationError(
                "Could not generate a unique application code. Please try again."
            )

        async def delete_center(ctx: SagaContext) -> None:
            await self._store.delete(Collection.CENTERS, {"id": ctx["center"].id})

        async def insert_associations(ctx: SagaContext) -> None:
            await self._store.insert_many(
                Collection.CENTER_SERVICES,
                [
                    {"lsc_id": ctx["center"].id, "service_item_id": item_id, "is_available": True}
                    for item_id in item_ids
                ],
            )

        saga = Saga("submit_application")
        saga.step("center", insert_center, compensation=delete_center)
        if item_ids:
            saga.step("associations", insert_associations)
        result = await saga.run()

        center: CenterRow = result.context["center"]
        logger.info(
            "Application submitted: center=%s services=%d", center.id, len(item_ids)
        )
        return ApplicationSubmitResponse(
            center_id=center.id,
            application_code=center.application_code,
        )

    # =========================================================================
    # Lookup
    # =========================================================================

    async def get_application_status(self, application_code: str) -> ApplicationStatusResponse:
        """Look up an application by its code.

        Raises:
            NotFoundError: If no center carries this code.
        """
        require(application_code)
        with translate_errors():
            center = await self._store.select_one(
                Collection.CENTERS, {"application_code": application_code.strip()}
            )
        if center is None:
            raise NotFoundError("No application found for this code")

        return ApplicationStatusResponse(
            center_id=center.id,
            name=center.name,
            status=center.status,
            can_issue_credentials=center.status == CenterStatus.APPROVED,
        )

    async def list_applications(
        self, status: CenterStatus | None = None
    ) -> list[ApplicationSummary]:
        """List centers, optionally by status, newest first."""
        filters = {"status": status.value} if status is not None else None
        with translate_errors():
            centers = await self._store.select_many(
                Collection.CENTERS, filters, order_by="created_at", descending=True
            )
        return [ApplicationSummary.model_validate(center) for center in centers]

    # =========================================================================
    # Review
    # =========================================================================

    async def review_application(
        self, center_id: str, decision: CenterStatus
    ) -> ApplicationReviewResponse:
        """Approve or reject a pending application.

        Args:
            center_id: Center under review.
            decision: APPROVED or REJECTED.

        Raises:
            ValidationError: If the decision is not APPROVED or REJECTED.
            NotFoundError: If the center does not exist.
            InvalidTransitionError: If the application is no longer pending.
        """
        require(center_id)
        if decision not in (CenterStatus.APPROVED, CenterStatus.REJECTED):
            raise ValidationError("Decision must be APPROVED or REJECTED")

        with translate_errors():
            center = await self._store.select_one(Collection.CENTERS, {"id": center_id})
            if center is None:
                raise NotFoundError("Application not found")
            if center.status != CenterStatus.PENDING:
                raise InvalidTransitionError(
                    f"Application is already {center.status.value}"
                )

            patch: dict = {"status": decision.value}
            if decision == CenterStatus.APPROVED:
                patch["is_active"] = True

            matched = await self._store.update(
                Collection.CENTERS,
                patch,
                {"id": center_id, "status": CenterStatus.PENDING.value},
            )

        if matched == 0:
            raise InvalidTransitionError("Application was reviewed by someone else")

        logger.info("Application %s %s", center_id, decision.value)
        return ApplicationReviewResponse(center_id=center_id, status=decision)

    # =========================================================================
    # Credential issuance
    # =========================================================================

    async def issue_credentials(
        self,
        email: str | None,
        password: str | None,
        center_id: str | None,
        application_code: str | None,
    ) -> SuccessResponse:
        """Create the operator login for an approved application.

        The code is consumed by the final update, which only matches while
        the center still carries it, so a code works at most once.

        Raises:
            ValidationError: If an input is missing or the password is short.
            NotFoundError: If the center does not exist.
            InvalidTransitionError: If the application is not approved.
            StaleCodeError: If the code does not match or was already used.
            AuthError: If the identity provider refuses the credential.
            StoreError: If the store fails; credential and profile are removed.
        """
        require(email, password, center_id, application_code)
        check_password(password, self._password_min_length)
        email = email.strip()
        application_code = application_code.strip()

        with translate_errors():
            center = await self._store.select_one(Collection.CENTERS, {"id": center_id})
        if center is None:
            raise NotFoundError("Application not found")
        if center.status != CenterStatus.APPROVED:
            raise InvalidTransitionError("Application has not been approved")
        if center.application_code != application_code:
            raise StaleCodeError("Application code is invalid or has already been used")

        async def create_credential(ctx: SagaContext) -> str:
            return await self._identity.create_credential(email, password, email_confirmed=True)

        async def delete_credential(ctx: SagaContext) -> None:
            await self._identity.delete_credential(ctx["credential"])

        async def insert_profile(ctx: SagaContext) -> None:
            await self._store.insert(
                Collection.PROFILES,
                {"user_id": ctx["credential"], "role": Role.LSC.value, "lsc_id": center_id},
            )

        async def delete_profile(ctx: SagaContext) -> None:
            await self._store.delete(Collection.PROFILES, {"user_id": ctx["credential"]})

        async def consume_code(ctx: SagaContext) -> None:
            matched = await self._store.update(
                Collection.CENTERS,
                {"is_active": True, "application_code": None},
                {
                    "id": center_id,
                    "application_code": application_code,
                    "status": CenterStatus.APPROVED.value,
                },
            )
            if matched == 0:
                raise StaleCodeError("Application code is invalid or has already been used")

        saga = Saga("issue_credentials")
        saga.step("credential", create_credential, compensation=delete_credential)
        saga.step("profile", insert_profile, compensation=delete_profile)
        saga.step("activation", consume_code)
        await saga.run()

        logger.info("Credentials issued for center %s", center_id)
        return SuccessResponse(message="Credentials created")

