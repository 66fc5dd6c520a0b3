# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the application lifecycle service."""

import pytest
import pytest_asyncio

from lscmis.core.config.settings import ApplicationCodeSettings
from lscmis.domains.application import ApplicationCodeGenerator, ApplicationService
from lscmis.domains.errors import (
    CodeGenerationError,
    InvalidTransitionError,
    NotFoundError,
    StaleCodeError,
    StoreError,
    ValidationError,
)
from lscmis.infrastructure.store import Collection
from lscmis.models.center import CenterFields
from lscmis.models.common import CenterStatus


def make_service(store, identity, settings, rng=None):
    codes = ApplicationCodeGenerator(store, settings, rng=rng)
    return ApplicationService(store, identity, codes, password_min_length=6)


@pytest.fixture
def service(store, identity, code_settings):
    return make_service(store, identity, code_settings)


@pytest.fixture
def fields(org):
    return CenterFields(
        name="Bishunpur Seva Kendra",
        district_id=org["other_district"].id,
        block_id=org["other_block"].id,
        contact_details="9123456780",
    )


@pytest_asyncio.fixture
async def submitted(service, org, fields):
    """A pending application offering one service."""
    return await service.submit_application(fields, [org["item_a"].id])


@pytest_asyncio.fixture
async def approved(service, submitted):
    await service.review_application(submitted.center_id, CenterStatus.APPROVED)
    return submitted


class TestSubmitApplication:
    """Tests for ApplicationService.submit_application."""

    @pytest.mark.asyncio
    async def test_creates_pending_inactive_center_with_services(
        self, service, store, org, fields
    ):
        result = await service.submit_application(
            fields, [org["item_a"].id, org["item_b"].id]
        )

        center = store.rows(Collection.CENTERS, id=result.center_id)[0]
        assert center["status"] == "PENDING"
        assert center["is_active"] is False
        assert center["application_code"] == result.application_code
        assert result.application_code.isdigit()
        assert len(store.rows(Collection.CENTER_SERVICES, lsc_id=result.center_id)) == 2

    @pytest.mark.asyncio
    async def test_services_are_optional(self, service, store, fields):
        result = await service.submit_application(fields)

        assert store.rows(Collection.CENTER_SERVICES) == []
        assert store.rows(Collection.CENTERS, id=result.center_id)

    @pytest.mark.asyncio
    async def test_workflow_columns_from_caller_are_ignored(self, service, store, org):
        fields = CenterFields.model_validate(
            {
                "lsc_name": "Sneaky Kendra",
                "status": "APPROVED",
                "is_active": True,
                "application_code": "12345",
            }
        )

        result = await service.submit_application(fields)

        center = store.rows(Collection.CENTERS, id=result.center_id)[0]
        assert center["name"] == "Sneaky Kendra"
        assert center["status"] == "PENDING"
        assert center["is_active"] is False
        assert center["application_code"] == result.application_code

    @pytest.mark.asyncio
    async def test_missing_name_rejected(self, service, store):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await service.submit_application(CenterFields(village="Kanke"))

        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_unknown_service_rejected(self, service, store, fields):
        with pytest.raises(ValidationError):
            await service.submit_application(fields, ["missing-item"])

        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_inactive_service_rejected(self, service, store, org, fields):
        retired = store.seed(
            Collection.SERVICE_ITEMS,
            category_id=org["category"].id,
            name="Demand draft",
            is_active=False,
        )

        with pytest.raises(ValidationError, match="Inactive service item"):
            await service.submit_application(fields, [retired.id])

        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_code_offset_by_center_count(
        self, store, identity, code_settings, scripted_random, fields
    ):
        store.seed(Collection.CENTERS, name="Existing", application_code=None)
        store.seed(Collection.CENTERS, name="Existing 2", application_code=None)
        service = make_service(store, identity, code_settings, scripted_random([20000]))

        result = await service.submit_application(fields)

        assert result.application_code == "20002"

    @pytest.mark.asyncio
    async def test_taken_code_is_redrawn(
        self, store, identity, code_settings, scripted_random, fields
    ):
        store.seed(Collection.CENTERS, name="Existing", application_code="20001")
        service = make_service(
            store, identity, code_settings, scripted_random([20000, 20000, 30000])
        )

        result = await service.submit_application(fields)

        assert result.application_code == "30001"

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_without_creating(
        self, store, identity, scripted_random, fields
    ):
        settings = ApplicationCodeSettings(range_start=10000, range_end=90000, max_attempts=3)
        store.seed(Collection.CENTERS, name="Existing", application_code="20001")
        service = make_service(store, identity, settings, scripted_random([20000] * 3))

        with pytest.raises(CodeGenerationError, match="Please try again"):
            await service.submit_application(fields)

        assert store.mutations == []
        assert len(store.rows(Collection.CENTERS)) == 1

    @pytest.mark.asyncio
    async def test_code_claimed_concurrently_is_redrawn(
        self, store, identity, code_settings, scripted_random, fields
    ):
        service = make_service(
            store, identity, code_settings, scripted_random([20000, 30000])
        )
        # A rival submission claims the same code between check and insert
        store.before(
            "insert",
            Collection.CENTERS,
            lambda: store.seed(Collection.CENTERS, name="Rival", application_code="20000"),
        )

        result = await service.submit_application(fields)

        assert result.application_code == "30000"
        codes = sorted(row["application_code"] for row in store.rows(Collection.CENTERS))
        assert codes == ["20000", "30000"]

    @pytest.mark.asyncio
    async def test_association_failure_removes_center(self, service, store, org, fields):
        store.fail("insert_many", Collection.CENTER_SERVICES)

        with pytest.raises(StoreError):
            await service.submit_application(fields, [org["item_a"].id])

        assert store.rows(Collection.CENTERS) == []


class TestReviewApplication:
    """Tests for ApplicationService.review_application."""

    @pytest.mark.asyncio
    async def test_approve_activates_and_keeps_code(self, service, store, submitted):
        result = await service.review_application(submitted.center_id, CenterStatus.APPROVED)

        assert result.status == CenterStatus.APPROVED
        center = store.rows(Collection.CENTERS, id=submitted.center_id)[0]
        assert center["status"] == "APPROVED"
        assert center["application_code"] == submitted.application_code

    @pytest.mark.asyncio
    async def test_reject(self, service, store, submitted):
        await service.review_application(submitted.center_id, CenterStatus.REJECTED)

        center = store.rows(Collection.CENTERS, id=submitted.center_id)[0]
        assert center["status"] == "REJECTED"
        assert center["is_active"] is False

    @pytest.mark.asyncio
    async def test_rejected_application_cannot_be_approved(self, service, store, submitted):
        await service.review_application(submitted.center_id, CenterStatus.REJECTED)

        with pytest.raises(InvalidTransitionError, match="already REJECTED"):
            await service.review_application(submitted.center_id, CenterStatus.APPROVED)

        assert store.rows(Collection.CENTERS, id=submitted.center_id)[0]["status"] == "REJECTED"

    @pytest.mark.asyncio
    async def test_pending_is_not_a_decision(self, service, submitted):
        with pytest.raises(ValidationError):
            await service.review_application(submitted.center_id, CenterStatus.PENDING)

    @pytest.mark.asyncio
    async def test_unknown_application(self, service):
        with pytest.raises(NotFoundError):
            await service.review_application("missing", CenterStatus.APPROVED)

    @pytest.mark.asyncio
    async def test_concurrent_review_detected(self, service, store, submitted):
        def rival_rejects():
            store.tables[Collection.CENTERS][0]["status"] = "REJECTED"

        store.before("update", Collection.CENTERS, rival_rejects)

        with pytest.raises(InvalidTransitionError, match="someone else"):
            await service.review_application(submitted.center_id, CenterStatus.APPROVED)

        assert store.rows(Collection.CENTERS)[0]["status"] == "REJECTED"


class TestIssueCredentials:
    """Tests for ApplicationService.issue_credentials."""

    @pytest.mark.asyncio
    async def test_issues_operator_login_and_consumes_code(
        self, service, store, identity, approved
    ):
        result = await service.issue_credentials(
            "op@example.org", "secret123", approved.center_id, approved.application_code
        )

        assert result.message == "Credentials created"
        [user_id] = identity.credentials
        assert store.rows(Collection.PROFILES) == [
            {"user_id": user_id, "role": "LSC", "lsc_id": approved.center_id}
        ]
        center = store.rows(Collection.CENTERS, id=approved.center_id)[0]
        assert center["is_active"] is True
        assert center["application_code"] is None

    @pytest.mark.asyncio
    async def test_code_works_only_once(self, service, identity, approved):
        await service.issue_credentials(
            "op@example.org", "secret123", approved.center_id, approved.application_code
        )

        with pytest.raises(StaleCodeError):
            await service.issue_credentials(
                "other@example.org", "secret123", approved.center_id, approved.application_code
            )

        assert len(identity.credentials) == 1

    @pytest.mark.asyncio
    async def test_wrong_code_rejected(self, service, identity, approved):
        with pytest.raises(StaleCodeError):
            await service.issue_credentials(
                "op@example.org", "secret123", approved.center_id, "00000"
            )

        assert identity.mutations == []

    @pytest.mark.asyncio
    async def test_pending_application_rejected(self, service, identity, submitted):
        with pytest.raises(InvalidTransitionError, match="not been approved"):
            await service.issue_credentials(
                "op@example.org", "secret123", submitted.center_id, submitted.application_code
            )

        assert identity.mutations == []

    @pytest.mark.asyncio
    async def test_unknown_center(self, service):
        with pytest.raises(NotFoundError):
            await service.issue_credentials("op@example.org", "secret123", "missing", "20000")

    @pytest.mark.asyncio
    async def test_missing_input_rejected(self, service, approved):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await service.issue_credentials(
                "op@example.org", "secret123", approved.center_id, "  "
            )

    @pytest.mark.asyncio
    async def test_code_consumed_concurrently_rolls_back(
        self, service, store, identity, approved
    ):
        def rival_consumes():
            store.tables[Collection.CENTERS][0]["application_code"] = None

        store.before("update", Collection.CENTERS, rival_consumes)

        with pytest.raises(StaleCodeError):
            await service.issue_credentials(
                "op@example.org", "secret123", approved.center_id, approved.application_code
            )

        assert identity.credentials == {}
        assert store.rows(Collection.PROFILES) == []

    @pytest.mark.asyncio
    async def test_profile_failure_removes_credential(self, service, store, identity, approved):
        store.fail("insert", Collection.PROFILES)

        with pytest.raises(StoreError):
            await service.issue_credentials(
                "op@example.org", "secret123", approved.center_id, approved.application_code
            )

        assert identity.credentials == {}
        center = store.rows(Collection.CENTERS, id=approved.center_id)[0]
        assert center["application_code"] == approved.application_code


class TestApplicationLookup:
    """Tests for status lookup and listing."""

    @pytest.mark.asyncio
    async def test_status_of_pending_application(self, service, submitted):
        status = await service.get_application_status(submitted.application_code)

        assert status.center_id == submitted.center_id
        assert status.status == CenterStatus.PENDING
        assert status.can_issue_credentials is False

    @pytest.mark.asyncio
    async def test_status_of_approved_application(self, service, approved):
        status = await service.get_application_status(approved.application_code)

        assert status.can_issue_credentials is True

    @pytest.mark.asyncio
    async def test_consumed_code_no_longer_found(self, service, approved):
        await service.issue_credentials(
            "op@example.org", "secret123", approved.center_id, approved.application_code
        )

        with pytest.raises(NotFoundError):
            await service.get_application_status(approved.application_code)

    @pytest.mark.asyncio
    async def test_list_filters_by_status_newest_first(self, service, fields):
        first = await service.submit_application(fields)
        second = await service.submit_application(fields.model_copy(update={"name": "Second"}))
        await service.review_application(first.center_id, CenterStatus.REJECTED)

        pending = await service.list_applications(CenterStatus.PENDING)
        everything = await service.list_applications()

        assert [a.id for a in pending] == [second.center_id]
        assert [a.id for a in everything] == [second.center_id, first.center_id]
