# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-beneficiary service transactions recorded by center operators."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lscmis.infrastructure.database.models.base import Base, UUIDPrimaryKeyMixin
from lscmis.utils.datetime import utc_now


class ServiceTransaction(UUIDPrimaryKeyMixin, Base):
    """A service delivered to one beneficiary. Never updated, only deleted."""

    __tablename__ = "service_transactions"
    __table_args__ = (
        CheckConstraint("amount_collected >= 0", name="ck_service_transactions_amount"),
    )

    lsc_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("lscs.id"), index=True, nullable=False
    )
    service_item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("service_items.id"), index=True, nullable=False
    )
    service_start_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    service_end_date: Mapped[Optional[date]] = mapped_column(Date)
    beneficiary_name: Mapped[str] = mapped_column(String(200), nullable=False)
    beneficiary_address: Mapped[Optional[str]] = mapped_column(Text)
    beneficiary_phone: Mapped[Optional[str]] = mapped_column(String(30))
    amount_collected: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
