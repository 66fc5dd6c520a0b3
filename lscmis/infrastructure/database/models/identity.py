# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Login credentials and the role profiles that bind them to the hierarchy.

``credentials`` is only used by the database identity backend. With an
external identity provider the credential lives there and ``profiles.user_id``
holds the provider's user id, so there is no foreign key between the two.
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from lscmis.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Credential(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Login credential owned by the database identity backend."""

    __tablename__ = "credentials"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    confirmed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Profile(TimestampMixin, Base):
    """Role and scope of a credential. Exactly one per credential."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('ADMIN', 'DISTRICT', 'BLOCK', 'LSC')", name="ck_profiles_role"
        ),
    )

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    district_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("districts.id"))
    block_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("blocks.id"))
    lsc_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("lscs.id"), index=True)
