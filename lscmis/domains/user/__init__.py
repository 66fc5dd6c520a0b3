# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account deletion and the officer report."""

from lscmis.domains.user.service import UserService

__all__ = ["UserService"]
