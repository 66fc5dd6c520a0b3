# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service catalog and the services each center offers."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lscmis.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ServiceCategory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Grouping of service items."""

    __tablename__ = "service_categories"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)


class ServiceItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A service a center can offer. Belongs to exactly one category."""

    __tablename__ = "service_items"

    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("service_categories.id"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class CenterService(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Join row: which service items a center offers."""

    __tablename__ = "lsc_services"
    __table_args__ = (
        UniqueConstraint("lsc_id", "service_item_id", name="uq_lsc_services_lsc_item"),
    )

    lsc_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("lscs.id"), index=True, nullable=False
    )
    service_item_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("service_items.id"), index=True, nullable=False
    )
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
