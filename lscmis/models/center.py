# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Center (LSC) request and response models.

CenterFields carries the editable details of a center. Workflow-owned
columns (status, is_active, application_code) are never accepted from a
caller and are silently dropped if sent.
"""

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from lscmis.models.common import SuccessResponse

_REQUIRED_FLAGS = ("has_building", "has_furniture")


class CenterFields(BaseModel):
    """Editable center details as submitted by a form."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(
        None,
        max_length=200,
        validation_alias=AliasChoices("name", "lsc_name"),
        description="Center name",
    )
    date_of_establishment: date | None = Field(None, description="Date the center opened")
    district_id: str | None = Field(None, description="District the center belongs to")
    block_id: str | None = Field(None, description="Block the center belongs to")
    village: str | None = Field(None, max_length=200)
    gp: str | None = Field(None, max_length=200, description="Gram panchayat")
    clf_code: str | None = Field(None, max_length=50, description="Cluster level federation code")
    clf_name: str | None = Field(None, max_length=200)
    clf_formation_date: date | None = None
    operator_name: str | None = Field(None, max_length=200)
    staff_count: int | None = Field(None, ge=0)
    contact_details: str | None = Field(None, max_length=50, description="Contact phone number")
    address: str | None = None
    bank_name: str | None = Field(None, max_length=200)
    account_no: str | None = Field(None, max_length=50)
    ifsc: str | None = Field(None, max_length=20)
    branch: str | None = Field(None, max_length=200)
    has_building: bool | None = None
    has_furniture: bool | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        # Forms submit untouched inputs as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_row(self, *, partial: bool = False) -> dict[str, Any]:
        """Column values for the store.

        Args:
            partial: Only include fields the caller actually sent, keeping
                explicit nulls so they clear the column. The building and
                furniture flags are NOT NULL, so a null there is dropped and
                the stored value stays.
        """
        if partial:
            row = self.model_dump(exclude_unset=True)
            for column in _REQUIRED_FLAGS:
                if column in row and row[column] is None:
                    del row[column]
            return row
        return self.model_dump(exclude_none=True)


class CenterCreateRequest(BaseModel):
    """Admin request creating a center together with its operator account."""

    email: EmailStr | None = Field(None, description="Operator login e-mail")
    password: str | None = Field(None, description="Operator password")
    lsc: CenterFields = Field(default_factory=CenterFields, description="Center details")
    services: list[str] = Field(default_factory=list, description="Service item IDs offered")


class CenterCreateResponse(SuccessResponse):
    """Result of a successful provisioning."""

    center_id: str = Field(..., description="ID of the new center")


class CenterUpdateRequest(BaseModel):
    """Admin request replacing a center's details and service set."""

    lsc_id: str = Field(..., min_length=1, description="Center to update")
    lsc: CenterFields = Field(default_factory=CenterFields)
    services: list[str] = Field(..., description="Complete new set of service item IDs")
