# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication helpers."""

from lscmis.domains.auth.password import PasswordHasher

__all__ = ["PasswordHasher"]
