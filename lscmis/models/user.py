# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Officer account request and response models."""

from pydantic import BaseModel, EmailStr, Field

from lscmis.models.common import Role, SuccessResponse


class UserCreateRequest(BaseModel):
    """Admin request creating an ADMIN, DISTRICT or BLOCK account."""

    email: EmailStr | None = Field(None, description="Login e-mail")
    password: str | None = Field(None, description="Initial password")
    role: Role | None = Field(None, description="ADMIN, DISTRICT or BLOCK")
    district_id: str | None = Field(None, description="Required for DISTRICT officers")
    block_id: str | None = Field(None, description="Required for BLOCK officers")


class UserCreateResponse(SuccessResponse):
    user_id: str = Field(..., description="ID of the new credential and profile")


class UserDeleteRequest(BaseModel):
    user_id: str | None = Field(None, description="User to delete")


class OfficerSummary(BaseModel):
    """District or block officer with e-mail and scope names."""

    user_id: str
    role: Role
    email: str | None = None
    district: str | None = None
    block: str | None = None
