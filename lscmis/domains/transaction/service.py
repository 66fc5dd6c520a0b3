# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service transactions recorded by a center operator.

Transactions are append-only: they are recorded and deleted but never
edited. Every operation is scoped to the center that owns the transaction.
"""

import logging
from datetime import date

from lscmis.domains.errors import NotFoundError, ValidationError
from lscmis.domains.workflow import translate_errors
from lscmis.infrastructure.store import Collection, Predicate, RelationalStore, eq, gte, lte
from lscmis.models.common import SuccessResponse
from lscmis.models.transaction import TransactionCreateRequest, TransactionResponse

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for a center's service transactions."""

    def __init__(self, store: RelationalStore) -> None:
        self._store = store

    async def record_transaction(
        self, center_id: str, data: TransactionCreateRequest
    ) -> TransactionResponse:
        """Record one service delivered by a center.

        Args:
            center_id: Center delivering the service.
            data: Transaction details.

        Returns:
            The stored transaction.

        Raises:
            NotFoundError: If the center does not exist.
            ValidationError: If the amount is negative, the end date precedes
                the start date, or the center does not offer the service.
        """
        if data.amount_collected < 0:
            raise ValidationError("Amount collected cannot be negative")
        if data.service_end_date is not None and data.service_end_date < data.service_start_date:
            raise ValidationError("Service end date cannot be before the start date")

        with translate_errors():
            if not await self._store.count(Collection.CENTERS, {"id": center_id}):
                raise NotFoundError("Center not found")
            offered = await self._store.count(
                Collection.CENTER_SERVICES,
                {
                    "lsc_id": center_id,
                    "service_item_id": data.service_item_id,
                    "is_available": True,
                },
            )
            if not offered:
                raise ValidationError("This service is not offered by the center")

            transaction = await self._store.insert(
                Collection.SERVICE_TRANSACTIONS,
                {"lsc_id": center_id, **data.model_dump()},
            )

        logger.info("Transaction recorded: %s center=%s", transaction.id, center_id)
        return TransactionResponse.model_validate(transaction)

    async def list_transactions(
        self,
        center_id: str,
        from_date: date | None = None,
        to_date: date | None = None,
        service_item_id: str | None = None,
    ) -> list[TransactionResponse]:
        """List a center's transactions, newest first.

        Date bounds are inclusive and apply to the service start date.
        """
        if from_date is not None and to_date is not None and from_date > to_date:
            raise ValidationError("From date cannot be after to date")

        filters: list[Predicate] = [eq("lsc_id", center_id)]
        if from_date is not None:
            filters.append(gte("service_start_date", from_date))
        if to_date is not None:
            filters.append(lte("service_start_date", to_date))
        if service_item_id:
            filters.append(eq("service_item_id", service_item_id))

        with translate_errors():
            transactions = await self._store.select_many(
                Collection.SERVICE_TRANSACTIONS,
                filters,
                order_by="created_at",
                descending=True,
            )
        return [TransactionResponse.model_validate(t) for t in transactions]

    async def delete_transaction(self, center_id: str, transaction_id: str) -> SuccessResponse:
        """Delete a transaction owned by the center.

        Raises:
            NotFoundError: If the center has no such transaction.
        """
        with translate_errors():
            deleted = await self._store.delete(
                Collection.SERVICE_TRANSACTIONS,
                {"id": transaction_id, "lsc_id": center_id},
            )
        if not deleted:
            raise NotFoundError("Transaction not found")

        logger.info("Transaction deleted: %s center=%s", transaction_id, center_id)
        return SuccessResponse()
