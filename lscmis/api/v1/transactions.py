# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Center service transaction endpoints.

This module provides:
- GET /{center_id}/transactions - List transactions with date filters
- POST /{center_id}/transactions - Record a transaction
- DELETE /{center_id}/transactions/{transaction_id} - Delete a transaction
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from lscmis.api.dependencies import get_transaction_service
from lscmis.domains.transaction import TransactionService
from lscmis.models.common import SuccessResponse
from lscmis.models.transaction import TransactionCreateRequest, TransactionResponse

router = APIRouter()


@router.get("/{center_id}/transactions", response_model=list[TransactionResponse])
async def list_transactions(
    center_id: str,
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    service_item_id: str | None = Query(None),
    service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionResponse]:
    return await service.list_transactions(
        center_id,
        from_date=from_date,
        to_date=to_date,
        service_item_id=service_item_id,
    )


@router.post("/{center_id}/transactions", response_model=TransactionResponse)
async def record_transaction(
    center_id: str,
    request: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    return await service.record_transaction(center_id, request)


@router.delete(
    "/{center_id}/transactions/{transaction_id}",
    response_model=SuccessResponse,
)
async def delete_transaction(
    center_id: str,
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
) -> SuccessResponse:
    return await service.delete_transaction(center_id, transaction_id)
