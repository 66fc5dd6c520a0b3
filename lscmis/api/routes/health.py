# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Liveness and readiness probes.

/health always answers 200 and describes each component; /ready answers
503 until the relational store is reachable, so a load balancer only
routes onboarding traffic to instances that can persist it.
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from lscmis import __version__
from lscmis.core.config import get_settings
from lscmis.infrastructure.database import check_database_connection
from lscmis.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

_started = time.monotonic()


class ComponentStatus(BaseModel):
    """State of one backing service."""

    status: str
    latency_ms: float | None = None
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str = Field(description="healthy when every component is")
    version: str
    environment: str
    uptime_seconds: int
    checked_at: datetime
    components: dict[str, ComponentStatus]


class ReadinessResponse(BaseModel):
    ready: bool


async def _probe_store() -> ComponentStatus:
    start = time.perf_counter()
    reachable = await check_database_connection()
    latency = round((time.perf_counter() - start) * 1000, 2)
    if not reachable:
        logger.warning("Health check: relational store unreachable")
        return ComponentStatus(status="unhealthy", latency_ms=latency)
    return ComponentStatus(status="healthy", latency_ms=latency)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report process uptime and the state of the store and identity backend."""
    settings = get_settings()
    store = await _probe_store()
    # The identity backend has no cheap probe; report which one is wired
    identity = ComponentStatus(status="configured", detail=settings.identity.backend)

    return HealthResponse(
        status=store.status,
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.monotonic() - _started),
        checked_at=utc_now(),
        components={"store": store, "identity": identity},
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    ready = await check_database_connection()
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready)
