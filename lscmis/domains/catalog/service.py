# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service catalog and organization lookups.

Categories and items are referenced by convention rather than by
cascading foreign keys, so deletes are guarded here: dependents are
counted first and a referenced entity is never handed to the store for
deletion.
"""

import logging
from collections import Counter

from lscmis.domains.errors import ConflictError, NotFoundError, ValidationError
from lscmis.domains.workflow import translate_errors
from lscmis.infrastructure.store import Collection, RelationalStore
from lscmis.models.catalog import (
    BlockResponse,
    CategoryResponse,
    DistrictResponse,
    ItemResponse,
)
from lscmis.models.common import SuccessResponse

logger = logging.getLogger(__name__)


def _clean_name(name: str | None, label: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} name is required")
    return cleaned


class CatalogService:
    """Service for service categories, service items and lookups."""

    def __init__(self, store: RelationalStore) -> None:
        self._store = store

    # =========================================================================
    # Categories
    # =========================================================================

    async def list_categories(self) -> list[CategoryResponse]:
        """List categories by name with the number of items in each."""
        with translate_errors():
            categories = await self._store.select_many(
                Collection.SERVICE_CATEGORIES, order_by="name"
            )
            items = await self._store.select_many(Collection.SERVICE_ITEMS)

        counts = Counter(item.category_id for item in items)
        return [
            CategoryResponse(id=c.id, name=c.name, service_count=counts[c.id])
            for c in categories
        ]

    async def create_category(self, name: str | None) -> CategoryResponse:
        """Create a category.

        Raises:
            ValidationError: If the name is blank.
            ConflictError: If a category with this name exists.
        """
        name = _clean_name(name, "Category")
        with translate_errors():
            if await self._store.count(Collection.SERVICE_CATEGORIES, {"name": name}):
                raise ConflictError("Category already exists")
            category = await self._store.insert(Collection.SERVICE_CATEGORIES, {"name": name})

        logger.info("Category created: %s", category.id)
        return CategoryResponse(id=category.id, name=category.name, service_count=0)

    async def rename_category(self, category_id: str, name: str | None) -> CategoryResponse:
        name = _clean_name(name, "Category")
        with translate_errors():
            existing = await self._store.select_one(
                Collection.SERVICE_CATEGORIES, {"name": name}
            )
            if existing is not None and existing.id != category_id:
                raise ConflictError("Category already exists")
            matched = await self._store.update(
                Collection.SERVICE_CATEGORIES, {"name": name}, {"id": category_id}
            )
            if not matched:
                raise NotFoundError("Category not found")
            count = await self._store.count(
                Collection.SERVICE_ITEMS, {"category_id": category_id}
            )

        return CategoryResponse(id=category_id, name=name, service_count=count)

    async def delete_category(self, category_id: str) -> SuccessResponse:
        """Delete a category that has no items.

        Raises:
            NotFoundError: If the category does not exist.
            ConflictError: If any item still belongs to it. Nothing is deleted.
        """
        with translate_errors():
            if not await self._store.count(Collection.SERVICE_CATEGORIES, {"id": category_id}):
                raise NotFoundError("Category not found")
            in_use = await self._store.count(
                Collection.SERVICE_ITEMS, {"category_id": category_id}
            )
            if in_use:
                raise ConflictError(
                    "Category is in use", details={"service_count": in_use}
                )
            await self._store.delete(Collection.SERVICE_CATEGORIES, {"id": category_id})

        logger.info("Category deleted: %s", category_id)
        return SuccessResponse()

    # =========================================================================
    # Items
    # =========================================================================

    async def list_items(self, category_id: str | None = None) -> list[ItemResponse]:
        filters = {"category_id": category_id} if category_id else None
        with translate_errors():
            items = await self._store.select_many(
                Collection.SERVICE_ITEMS, filters, order_by="name"
            )
        return [ItemResponse.model_validate(item) for item in items]

    async def create_item(self, category_id: str, name: str | None) -> ItemResponse:
        """Create an active service item under an existing category.

        Raises:
            ValidationError: If the name is blank.
            NotFoundError: If the category does not exist.
        """
        name = _clean_name(name, "Service")
        with translate_errors():
            if not await self._store.count(Collection.SERVICE_CATEGORIES, {"id": category_id}):
                raise NotFoundError("Category not found")
            item = await self._store.insert(
                Collection.SERVICE_ITEMS,
                {"category_id": category_id, "name": name, "is_active": True},
            )

        logger.info("Service item created: %s", item.id)
        return ItemResponse.model_validate(item)

    async def update_item(
        self,
        item_id: str,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> ItemResponse:
        """Rename a service item and/or toggle whether it is active."""
        patch: dict = {}
        if name is not None:
            patch["name"] = _clean_name(name, "Service")
        if is_active is not None:
            patch["is_active"] = is_active
        if not patch:
            raise ValidationError("Nothing to update")

        with translate_errors():
            matched = await self._store.update(Collection.SERVICE_ITEMS, patch, {"id": item_id})
            if not matched:
                raise NotFoundError("Service item not found")
            item = await self._store.select_one(Collection.SERVICE_ITEMS, {"id": item_id})

        return ItemResponse.model_validate(item)

    async def delete_item(self, item_id: str) -> SuccessResponse:
        """Delete a service item no center offers and no transaction records.

        Raises:
            NotFoundError: If the item does not exist.
            ConflictError: If the item is still referenced. Nothing is deleted.
        """
        with translate_errors():
            if not await self._store.count(Collection.SERVICE_ITEMS, {"id": item_id}):
                raise NotFoundError("Service item not found")
            offered = await self._store.count(
                Collection.CENTER_SERVICES, {"service_item_id": item_id}
            )
            recorded = await self._store.count(
                Collection.SERVICE_TRANSACTIONS, {"service_item_id": item_id}
            )
            if offered or recorded:
                raise ConflictError(
                    "Service item is in use",
                    details={"centers": offered, "transactions": recorded},
                )
            await self._store.delete(Collection.SERVICE_ITEMS, {"id": item_id})

        logger.info("Service item deleted: %s", item_id)
        return SuccessResponse()

    # =========================================================================
    # Organization lookups
    # =========================================================================

    async def list_districts(self) -> list[DistrictResponse]:
        with translate_errors():
            districts = await self._store.select_many(Collection.DISTRICTS, order_by="name")
        return [DistrictResponse.model_validate(d) for d in districts]

    async def list_blocks(self, district_id: str) -> list[BlockResponse]:
        with translate_errors():
            blocks = await self._store.select_many(
                Collection.BLOCKS, {"district_id": district_id}, order_by="name"
            )
        return [BlockResponse.model_validate(b) for b in blocks]
