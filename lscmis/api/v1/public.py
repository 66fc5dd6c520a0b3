# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public endpoints for center self-registration.

This module provides:
- POST /newapplication - Submit a center application
- GET /applications/{application_code} - Check an application's status
- POST /createlsccredential - Create the operator login after approval
"""

import logging

from fastapi import APIRouter, Depends

from lscmis.api.dependencies import get_application_service
from lscmis.domains.application import ApplicationService
from lscmis.models.application import (
    ApplicationStatusResponse,
    ApplicationSubmitRequest,
    ApplicationSubmitResponse,
    CredentialIssueRequest,
)
from lscmis.models.common import ErrorResponse, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/newapplication",
    response_model=ApplicationSubmitResponse,
    summary="Submit a center application",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid application"},
        500: {"model": ErrorResponse, "description": "No application code available"},
    },
)
async def new_application(
    request: ApplicationSubmitRequest,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationSubmitResponse:
    return await service.submit_application(request.lsc, request.services)


@router.get(
    "/applications/{application_code}",
    response_model=ApplicationStatusResponse,
    summary="Look up an application by its code",
    responses={404: {"model": ErrorResponse, "description": "Unknown application code"}},
)
async def application_status(
    application_code: str,
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationStatusResponse:
    return await service.get_application_status(application_code)


@router.post(
    "/createlsccredential",
    response_model=SuccessResponse,
    summary="Create the operator login for an approved application",
    description="""
    The application code is consumed by this call. A second request with the
    same code fails.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid, unapproved or used code"},
        404: {"model": ErrorResponse, "description": "Application not found"},
    },
)
async def create_lsc_credential(
    request: CredentialIssueRequest,
    service: ApplicationService = Depends(get_application_service),
) -> SuccessResponse:
    return await service.issue_credentials(
        request.email, request.password, request.lsc_id, request.application_code
    )
