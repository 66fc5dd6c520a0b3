# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service catalog with guarded deletes, plus district and block lookups."""

from lscmis.domains.catalog.service import CatalogService

__all__ = ["CatalogService"]
