# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Organizational hierarchy: districts, blocks and local service centers."""

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lscmis.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class District(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Top level of the hierarchy."""

    __tablename__ = "districts"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)


class Block(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Administrative block inside a district."""

    __tablename__ = "blocks"

    district_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("districts.id"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)


class Center(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Local service center (LSC).

    Created either directly by an admin (APPROVED, active) or through public
    self-registration (PENDING, inactive, with an application code that is
    cleared once the operator's credentials are issued).
    """

    __tablename__ = "lscs"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')", name="ck_lscs_status"
        ),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_establishment: Mapped[Optional[date]] = mapped_column(Date)
    district_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("districts.id"), index=True
    )
    block_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("blocks.id"), index=True
    )
    village: Mapped[Optional[str]] = mapped_column(String(120))
    gp: Mapped[Optional[str]] = mapped_column(String(120))
    clf_code: Mapped[Optional[str]] = mapped_column(String(50))
    clf_name: Mapped[Optional[str]] = mapped_column(String(200))
    clf_formation_date: Mapped[Optional[date]] = mapped_column(Date)

    # Staff
    operator_name: Mapped[Optional[str]] = mapped_column(String(200))
    staff_count: Mapped[Optional[int]] = mapped_column(Integer)
    contact_details: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(Text)

    # Banking
    bank_name: Mapped[Optional[str]] = mapped_column(String(120))
    account_no: Mapped[Optional[str]] = mapped_column(String(50))
    ifsc: Mapped[Optional[str]] = mapped_column(String(20))
    branch: Mapped[Optional[str]] = mapped_column(String(120))

    # Infrastructure and location
    has_building: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    has_furniture: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)

    # Lifecycle
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="PENDING", nullable=False, index=True)
    application_code: Mapped[Optional[str]] = mapped_column(String(12), unique=True)
