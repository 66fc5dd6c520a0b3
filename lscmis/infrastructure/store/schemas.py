# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Typed row shapes returned by the relational store.

Every row leaving the store is validated into one of these schemas, so a
malformed row fails at the boundary instead of surfacing later as a missing
attribute in a workflow.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from lscmis.models.common import CenterStatus, Role


class Collection(str, Enum):
    """Named collections (tables) reachable through the store."""

    DISTRICTS = "districts"
    BLOCKS = "blocks"
    CENTERS = "lscs"
    PROFILES = "profiles"
    SERVICE_CATEGORIES = "service_categories"
    SERVICE_ITEMS = "service_items"
    CENTER_SERVICES = "lsc_services"
    SERVICE_TRANSACTIONS = "service_transactions"


class StoreRow(BaseModel):
    """Base for row schemas."""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class DistrictRow(StoreRow):
    id: str
    name: str


class BlockRow(StoreRow):
    id: str
    district_id: str
    name: str


class CenterRow(StoreRow):
    id: str
    name: str
    date_of_establishment: date | None = None
    district_id: str | None = None
    block_id: str | None = None
    village: str | None = None
    gp: str | None = None
    clf_code: str | None = None
    clf_name: str | None = None
    clf_formation_date: date | None = None
    operator_name: str | None = None
    staff_count: int | None = None
    contact_details: str | None = None
    address: str | None = None
    bank_name: str | None = None
    account_no: str | None = None
    ifsc: str | None = None
    branch: str | None = None
    has_building: bool = False
    has_furniture: bool = False
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool
    status: CenterStatus
    application_code: str | None = None
    created_at: datetime | None = None


class ProfileRow(StoreRow):
    user_id: str
    role: Role
    district_id: str | None = None
    block_id: str | None = None
    lsc_id: str | None = None


class ServiceCategoryRow(StoreRow):
    id: str
    name: str


class ServiceItemRow(StoreRow):
    id: str
    category_id: str
    name: str
    is_active: bool


class CenterServiceRow(StoreRow):
    id: str
    lsc_id: str
    service_item_id: str
    is_available: bool


class ServiceTransactionRow(StoreRow):
    id: str
    lsc_id: str
    service_item_id: str
    service_start_date: date
    service_end_date: date | None = None
    beneficiary_name: str
    beneficiary_address: str | None = None
    beneficiary_phone: str | None = None
    amount_collected: Decimal = Field(ge=0)
    created_at: datetime | None = None


ROW_SCHEMAS: dict[Collection, type[StoreRow]] = {
    Collection.DISTRICTS: DistrictRow,
    Collection.BLOCKS: BlockRow,
    Collection.CENTERS: CenterRow,
    Collection.PROFILES: ProfileRow,
    Collection.SERVICE_CATEGORIES: ServiceCategoryRow,
    Collection.SERVICE_ITEMS: ServiceItemRow,
    Collection.CENTER_SERVICES: CenterServiceRow,
    Collection.SERVICE_TRANSACTIONS: ServiceTransactionRow,
}
