# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models for the HTTP surface."""

from lscmis.models.common import CenterStatus, ErrorResponse, Role, SuccessResponse

__all__ = [
    "CenterStatus",
    "ErrorResponse",
    "Role",
    "SuccessResponse",
]
