# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enums and response shapes."""

from enum import Enum

from pydantic import BaseModel


class CenterStatus(str, Enum):
    """Application status of a center."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Role(str, Enum):
    """Role carried by a profile. Determines which scope column is set."""

    ADMIN = "ADMIN"
    DISTRICT = "DISTRICT"
    BLOCK = "BLOCK"
    LSC = "LSC"


class SuccessResponse(BaseModel):
    """Body returned by mutations that produce no payload."""

    success: bool = True
    message: str | None = None


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
