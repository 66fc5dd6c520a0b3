# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-center service transactions."""

from lscmis.domains.transaction.service import TransactionService

__all__ = ["TransactionService"]
