# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service catalog and organization lookup endpoints.

This module provides:
- GET/POST /categories, PATCH/DELETE /categories/{category_id}
- GET/POST /items, PATCH/DELETE /items/{item_id}
- GET /districts, GET /districts/{district_id}/blocks

Deleting a category with items, or an item any center offers or any
transaction records, is refused with 400.
"""

from fastapi import APIRouter, Depends, Query

from lscmis.api.dependencies import get_catalog_service
from lscmis.domains.catalog import CatalogService
from lscmis.models.catalog import (
    BlockResponse,
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    DistrictResponse,
    ItemCreateRequest,
    ItemResponse,
    ItemUpdateRequest,
)
from lscmis.models.common import SuccessResponse

router = APIRouter()


# =========================================================================
# Categories
# =========================================================================


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    service: CatalogService = Depends(get_catalog_service),
) -> list[CategoryResponse]:
    return await service.list_categories()


@router.post("/categories", response_model=CategoryResponse)
async def create_category(
    request: CategoryCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryResponse:
    return await service.create_category(request.name)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def rename_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryResponse:
    return await service.rename_category(category_id, request.name)


@router.delete("/categories/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> SuccessResponse:
    return await service.delete_category(category_id)


# =========================================================================
# Items
# =========================================================================


@router.get("/items", response_model=list[ItemResponse])
async def list_items(
    category_id: str | None = Query(None),
    service: CatalogService = Depends(get_catalog_service),
) -> list[ItemResponse]:
    return await service.list_items(category_id)


@router.post("/items", response_model=ItemResponse)
async def create_item(
    request: ItemCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> ItemResponse:
    return await service.create_item(request.category_id, request.name)


@router.patch("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    request: ItemUpdateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> ItemResponse:
    return await service.update_item(item_id, name=request.name, is_active=request.is_active)


@router.delete("/items/{item_id}", response_model=SuccessResponse)
async def delete_item(
    item_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> SuccessResponse:
    return await service.delete_item(item_id)


# =========================================================================
# Organization lookups
# =========================================================================


@router.get("/districts", response_model=list[DistrictResponse])
async def list_districts(
    service: CatalogService = Depends(get_catalog_service),
) -> list[DistrictResponse]:
    return await service.list_districts()


@router.get("/districts/{district_id}/blocks", response_model=list[BlockResponse])
async def list_blocks(
    district_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> list[BlockResponse]:
    return await service.list_blocks(district_id)
