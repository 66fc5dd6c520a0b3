# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin endpoints for provisioning, accounts and application review.

This module provides:
- POST /create-lsc - Create an approved center with its operator account
- POST /create-user - Create an ADMIN, DISTRICT or BLOCK account
- DELETE /delete-user - Delete a user's profile and credential
- POST /update-lsc - Update center details and replace its services
- GET /users - List district and block officers
- GET /applications - List center applications by status
- POST /applications/{center_id}/review - Approve or reject an application

Workflow errors are turned into ``{"error": ...}`` responses by the
handlers in lscmis.api.errors.

Example:
    POST /api/v1/admin/create-lsc
    {
        "email": "operator@example.org",
        "password": "secret123",
        "lsc": {"lsc_name": "Kendra 1", "district_id": "...", "block_id": "..."},
        "services": ["<service item id>"]
    }
"""

import logging

from fastapi import APIRouter, Depends, Query

from lscmis.api.dependencies import (
    get_application_service,
    get_provisioning_service,
    get_user_service,
)
from lscmis.domains.application import ApplicationService
from lscmis.domains.provisioning import ProvisioningService
from lscmis.domains.user import UserService
from lscmis.models.application import (
    ApplicationReviewRequest,
    ApplicationReviewResponse,
    ApplicationSummary,
)
from lscmis.models.center import CenterCreateRequest, CenterCreateResponse, CenterUpdateRequest
from lscmis.models.common import CenterStatus, ErrorResponse, SuccessResponse
from lscmis.models.user import (
    OfficerSummary,
    UserCreateRequest,
    UserCreateResponse,
    UserDeleteRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input or workflow failure"},
    500: {"model": ErrorResponse, "description": "Server error"},
}


@router.post(
    "/create-lsc",
    response_model=CenterCreateResponse,
    summary="Provision a center",
    description="""
    Create an operator credential, an approved center, the operator profile
    and the center's service associations as one unit.

    If any step fails, everything already created is removed again.
    """,
    responses=_ERRORS,
)
async def create_lsc(
    request: CenterCreateRequest,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> CenterCreateResponse:
    logger.info("Provisioning request received: services=%d", len(request.services))
    return await service.provision_center(
        request.email, request.password, request.lsc, request.services
    )


@router.post(
    "/create-user",
    response_model=UserCreateResponse,
    summary="Create an officer account",
    responses=_ERRORS,
)
async def create_user(
    request: UserCreateRequest,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> UserCreateResponse:
    return await service.create_user(
        request.email,
        request.password,
        request.role,
        district_id=request.district_id,
        block_id=request.block_id,
    )


@router.delete(
    "/delete-user",
    response_model=SuccessResponse,
    summary="Delete a user",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Profile not found"}},
)
async def delete_user(
    request: UserDeleteRequest,
    service: UserService = Depends(get_user_service),
) -> SuccessResponse:
    return await service.delete_user(request.user_id)


@router.post(
    "/update-lsc",
    response_model=SuccessResponse,
    summary="Update a center and its services",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Center not found"}},
)
async def update_lsc(
    request: CenterUpdateRequest,
    service: ProvisioningService = Depends(get_provisioning_service),
) -> SuccessResponse:
    return await service.update_center(request.lsc_id, request.lsc, request.services)


@router.get(
    "/users",
    response_model=list[OfficerSummary],
    summary="List district and block officers",
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> list[OfficerSummary]:
    return await service.list_officers()


@router.get(
    "/applications",
    response_model=list[ApplicationSummary],
    summary="List center applications",
)
async def list_applications(
    status_filter: CenterStatus | None = Query(None, alias="status"),
    service: ApplicationService = Depends(get_application_service),
) -> list[ApplicationSummary]:
    return await service.list_applications(status_filter)


@router.post(
    "/applications/{center_id}/review",
    response_model=ApplicationReviewResponse,
    summary="Approve or reject an application",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Application not found"}},
)
async def review_application(
    center_id: str,
    request: ApplicationReviewRequest,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationReviewResponse:
    return await service.review_application(center_id, request.decision)
