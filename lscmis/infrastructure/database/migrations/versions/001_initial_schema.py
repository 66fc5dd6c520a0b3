# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Creates the organizational hierarchy, identity, catalog and transaction
tables. ``lscs.application_code`` is unique so two concurrent
self-registrations can never hold the same code.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "districts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "blocks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("district_id", sa.String(36), sa.ForeignKey("districts.id"), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_blocks_district_id", "blocks", ["district_id"])

    op.create_table(
        "lscs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("date_of_establishment", sa.Date()),
        sa.Column("district_id", sa.String(36), sa.ForeignKey("districts.id")),
        sa.Column("block_id", sa.String(36), sa.ForeignKey("blocks.id")),
        sa.Column("village", sa.String(120)),
        sa.Column("gp", sa.String(120)),
        sa.Column("clf_code", sa.String(50)),
        sa.Column("clf_name", sa.String(200)),
        sa.Column("clf_formation_date", sa.Date()),
        sa.Column("operator_name", sa.String(200)),
        sa.Column("staff_count", sa.Integer()),
        sa.Column("contact_details", sa.String(50)),
        sa.Column("address", sa.Text()),
        sa.Column("bank_name", sa.String(120)),
        sa.Column("account_no", sa.String(50)),
        sa.Column("ifsc", sa.String(20)),
        sa.Column("branch", sa.String(120)),
        sa.Column("has_building", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_furniture", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("latitude", sa.Float()),
        sa.Column("longitude", sa.Float()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("application_code", sa.String(12)),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')", name="ck_lscs_status"
        ),
        sa.UniqueConstraint("application_code", name="uq_lscs_application_code"),
    )
    op.create_index("ix_lscs_district_id", "lscs", ["district_id"])
    op.create_index("ix_lscs_block_id", "lscs", ["block_id"])
    op.create_index("ix_lscs_status", "lscs", ["status"])

    op.create_table(
        "credentials",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("district_id", sa.String(36), sa.ForeignKey("districts.id")),
        sa.Column("block_id", sa.String(36), sa.ForeignKey("blocks.id")),
        sa.Column("lsc_id", sa.String(36), sa.ForeignKey("lscs.id")),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('ADMIN', 'DISTRICT', 'BLOCK', 'LSC')", name="ck_profiles_role"
        ),
    )
    op.create_index("ix_profiles_role", "profiles", ["role"])
    op.create_index("ix_profiles_lsc_id", "profiles", ["lsc_id"])

    op.create_table(
        "service_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "service_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "category_id", sa.String(36), sa.ForeignKey("service_categories.id"), nullable=False
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_service_items_category_id", "service_items", ["category_id"])

    op.create_table(
        "lsc_services",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("lsc_id", sa.String(36), sa.ForeignKey("lscs.id"), nullable=False),
        sa.Column(
            "service_item_id", sa.String(36), sa.ForeignKey("service_items.id"), nullable=False
        ),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("lsc_id", "service_item_id", name="uq_lsc_services_lsc_item"),
    )
    op.create_index("ix_lsc_services_lsc_id", "lsc_services", ["lsc_id"])
    op.create_index("ix_lsc_services_service_item_id", "lsc_services", ["service_item_id"])

    op.create_table(
        "service_transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("lsc_id", sa.String(36), sa.ForeignKey("lscs.id"), nullable=False),
        sa.Column(
            "service_item_id", sa.String(36), sa.ForeignKey("service_items.id"), nullable=False
        ),
        sa.Column("service_start_date", sa.Date(), nullable=False),
        sa.Column("service_end_date", sa.Date()),
        sa.Column("beneficiary_name", sa.String(200), nullable=False),
        sa.Column("beneficiary_address", sa.Text()),
        sa.Column("beneficiary_phone", sa.String(30)),
        sa.Column("amount_collected", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("amount_collected >= 0", name="ck_service_transactions_amount"),
    )
    op.create_index("ix_service_transactions_lsc_id", "service_transactions", ["lsc_id"])
    op.create_index(
        "ix_service_transactions_service_item_id", "service_transactions", ["service_item_id"]
    )
    op.create_index(
        "ix_service_transactions_service_start_date",
        "service_transactions",
        ["service_start_date"],
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("service_transactions")
    op.drop_table("lsc_services")
    op.drop_table("service_items")
    op.drop_table("service_categories")
    op.drop_table("profiles")
    op.drop_table("credentials")
    op.drop_table("lscs")
    op.drop_table("blocks")
    op.drop_table("districts")
