# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application lifecycle request and response models."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from lscmis.models.center import CenterFields
from lscmis.models.common import CenterStatus, SuccessResponse


class ApplicationSubmitRequest(BaseModel):
    """Public self-registration of a new center."""

    lsc: CenterFields = Field(default_factory=CenterFields, description="Center details")
    services: list[str] = Field(default_factory=list, description="Requested service item IDs")


class ApplicationSubmitResponse(SuccessResponse):
    """Returned once an application is recorded."""

    center_id: str = Field(..., description="ID of the pending center")
    application_code: str = Field(..., description="Code the applicant keeps to track the application")


class ApplicationReviewRequest(BaseModel):
    """Admin decision on a pending application."""

    decision: CenterStatus = Field(..., description="APPROVED or REJECTED")


class ApplicationReviewResponse(SuccessResponse):
    center_id: str
    status: CenterStatus


class CredentialIssueRequest(BaseModel):
    """Applicant request for operator credentials after approval."""

    email: EmailStr | None = None
    password: str | None = None
    lsc_id: str | None = Field(None, validation_alias=AliasChoices("lsc_id", "center_id"))
    application_code: str | None = Field(
        None, validation_alias=AliasChoices("application_code", "applicationCode")
    )


class ApplicationStatusResponse(BaseModel):
    """Public view of an application looked up by its code."""

    center_id: str = Field(..., description="Center ID")
    name: str = Field(..., description="Center name")
    status: CenterStatus = Field(..., description="Current application status")
    can_issue_credentials: bool = Field(
        ..., description="Whether operator credentials can be requested now"
    )


class ApplicationSummary(BaseModel):
    """Row of the admin application lists."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    district_id: str | None = None
    block_id: str | None = None
    operator_name: str | None = None
    contact_details: str | None = None
    status: CenterStatus
    is_active: bool
    application_code: str | None = None
    created_at: datetime | None = None
