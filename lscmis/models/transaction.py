# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service transaction request and response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TransactionCreateRequest(BaseModel):
    """One service delivered to a beneficiary."""

    model_config = ConfigDict(str_strip_whitespace=True)

    service_item_id: str = Field(..., min_length=1, description="Service delivered")
    service_start_date: date = Field(..., description="Date the service started")
    service_end_date: date | None = Field(None, description="Date the service ended")
    beneficiary_name: str = Field(..., min_length=1, max_length=200)
    beneficiary_address: str | None = None
    beneficiary_phone: str | None = Field(None, max_length=20)
    amount_collected: Decimal = Field(Decimal("0"), description="Fee collected")


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lsc_id: str
    service_item_id: str
    service_start_date: date
    service_end_date: date | None = None
    beneficiary_name: str
    beneficiary_address: str | None = None
    beneficiary_phone: str | None = None
    amount_collected: Decimal
    created_at: datetime | None = None
