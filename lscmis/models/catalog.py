# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service catalog and organization lookup models."""

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., max_length=200, description="Category name")


class CategoryUpdateRequest(BaseModel):
    name: str = Field(..., max_length=200, description="New category name")


class CategoryResponse(BaseModel):
    """Category with the number of items filed under it."""

    id: str
    name: str
    service_count: int = Field(0, description="Number of service items in the category")


class ItemCreateRequest(BaseModel):
    category_id: str = Field(..., min_length=1, description="Owning category")
    name: str = Field(..., max_length=200, description="Service name")


class ItemUpdateRequest(BaseModel):
    """Partial update of a service item."""

    name: str | None = Field(None, max_length=200)
    is_active: bool | None = None


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str
    name: str
    is_active: bool


class DistrictResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class BlockResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    district_id: str
    name: str
