# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the service catalog."""

from datetime import date

import pytest

from lscmis.domains.catalog import CatalogService
from lscmis.domains.errors import ConflictError, NotFoundError, ValidationError
from lscmis.infrastructure.store import Collection


@pytest.fixture
def service(store):
    return CatalogService(store)


class TestCategories:
    """Tests for category management."""

    @pytest.mark.asyncio
    async def test_list_counts_items(self, service, store, org):
        store.seed(Collection.SERVICE_CATEGORIES, name="Agriculture")

        categories = await service.list_categories()

        assert [(c.name, c.service_count) for c in categories] == [
            ("Agriculture", 0),
            ("Banking", 2),
        ]

    @pytest.mark.asyncio
    async def test_create_trims_name(self, service, store):
        category = await service.create_category("  Insurance ")

        assert category.name == "Insurance"
        assert store.rows(Collection.SERVICE_CATEGORIES, name="Insurance")

    @pytest.mark.asyncio
    async def test_create_duplicate_conflicts(self, service, store, org):
        with pytest.raises(ConflictError, match="already exists"):
            await service.create_category("Banking")

        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_create_blank_rejected(self, service):
        with pytest.raises(ValidationError, match="Category name is required"):
            await service.create_category("   ")

    @pytest.mark.asyncio
    async def test_rename(self, service, org):
        category = await service.rename_category(org["category"].id, "Finance")

        assert category.name == "Finance"
        assert category.service_count == 2

    @pytest.mark.asyncio
    async def test_rename_to_own_name_is_allowed(self, service, org):
        category = await service.rename_category(org["category"].id, "Banking")

        assert category.name == "Banking"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_conflicts(self, service, store, org):
        other = store.seed(Collection.SERVICE_CATEGORIES, name="Agriculture")

        with pytest.raises(ConflictError):
            await service.rename_category(other.id, "Banking")

    @pytest.mark.asyncio
    async def test_rename_unknown(self, service):
        with pytest.raises(NotFoundError):
            await service.rename_category("missing", "Finance")

    @pytest.mark.asyncio
    async def test_delete_empty_category(self, service, store):
        category = store.seed(Collection.SERVICE_CATEGORIES, name="Agriculture")

        await service.delete_category(category.id)

        assert store.rows(Collection.SERVICE_CATEGORIES, id=category.id) == []

    @pytest.mark.asyncio
    async def test_delete_category_in_use_deletes_nothing(self, service, store, org):
        with pytest.raises(ConflictError) as exc_info:
            await service.delete_category(org["category"].id)

        assert exc_info.value.details == {"service_count": 2}
        assert store.mutations == []
        assert store.rows(Collection.SERVICE_CATEGORIES, id=org["category"].id)

    @pytest.mark.asyncio
    async def test_delete_unknown_category(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_category("missing")


class TestItems:
    """Tests for service item management."""

    @pytest.mark.asyncio
    async def test_list_by_category(self, service, store, org):
        other = store.seed(Collection.SERVICE_CATEGORIES, name="Agriculture")
        store.seed(Collection.SERVICE_ITEMS, category_id=other.id, name="Soil testing")

        items = await service.list_items(org["category"].id)

        assert [i.name for i in items] == ["Account opening", "Cash withdrawal"]
        assert len(await service.list_items()) == 3

    @pytest.mark.asyncio
    async def test_create_item_is_active(self, service, org):
        item = await service.create_item(org["category"].id, "Balance enquiry")

        assert item.is_active is True
        assert item.category_id == org["category"].id

    @pytest.mark.asyncio
    async def test_create_item_unknown_category(self, service, store):
        with pytest.raises(NotFoundError):
            await service.create_item("missing", "Balance enquiry")

        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_update_item(self, service, org):
        item = await service.update_item(org["item_a"].id, name="Cash deposit", is_active=False)

        assert item.name == "Cash deposit"
        assert item.is_active is False

    @pytest.mark.asyncio
    async def test_update_item_requires_a_change(self, service, org):
        with pytest.raises(ValidationError, match="Nothing to update"):
            await service.update_item(org["item_a"].id)

    @pytest.mark.asyncio
    async def test_update_unknown_item(self, service):
        with pytest.raises(NotFoundError):
            await service.update_item("missing", is_active=True)

    @pytest.mark.asyncio
    async def test_delete_unreferenced_item(self, service, store, org):
        await service.delete_item(org["item_b"].id)

        assert store.rows(Collection.SERVICE_ITEMS, id=org["item_b"].id) == []

    @pytest.mark.asyncio
    async def test_delete_offered_item_deletes_nothing(self, service, store, org):
        center = store.seed(Collection.CENTERS, name="Kendra")
        store.seed(
            Collection.CENTER_SERVICES, lsc_id=center.id, service_item_id=org["item_a"].id
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.delete_item(org["item_a"].id)

        assert exc_info.value.details == {"centers": 1, "transactions": 0}
        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_delete_item_with_transactions_deletes_nothing(self, service, store, org):
        center = store.seed(Collection.CENTERS, name="Kendra")
        store.seed(
            Collection.SERVICE_TRANSACTIONS,
            lsc_id=center.id,
            service_item_id=org["item_a"].id,
            service_start_date=date(2025, 3, 1),
            beneficiary_name="Ramesh",
            amount_collected=20,
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.delete_item(org["item_a"].id)

        assert exc_info.value.details == {"centers": 0, "transactions": 1}
        assert store.mutations == []

    @pytest.mark.asyncio
    async def test_delete_unknown_item(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_item("missing")


class TestLookups:
    """Tests for district and block lookups."""

    @pytest.mark.asyncio
    async def test_districts_sorted_by_name(self, service, org):
        districts = await service.list_districts()

        assert [d.name for d in districts] == ["Gumla", "Ranchi"]

    @pytest.mark.asyncio
    async def test_blocks_of_district(self, service, org):
        blocks = await service.list_blocks(org["district"].id)

        assert [b.name for b in blocks] == ["Kanke"]
