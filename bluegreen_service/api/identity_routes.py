"""
Identity and health routes.

/healthz is deliberately outside the chaos gate: orchestration must be able
to tell "pool failing traffic" apart from "process actually down".
"""

import platform
import sys
import time

from fastapi import APIRouter, Depends

from bluegreen_service import PROCESS_STARTED_MONOTONIC, __version__
from bluegreen_service.api.chaos_gate import chaos_gate
from bluegreen_service.api.deps import get_settings_dep
from bluegreen_service.api.models import (
    EndpointDirectory,
    HealthResponse,
    RootResponse,
    RuntimeEnvironment,
    VersionResponse,
    utc_timestamp,
)
from bluegreen_service.config import Settings

router = APIRouter(tags=["Identity"])


@router.api_route(
    "/version",
    methods=["GET", "HEAD"],
    response_model=VersionResponse,
    dependencies=[Depends(chaos_gate)],
)
async def version(
    settings: Settings = Depends(get_settings_dep),
) -> VersionResponse:
    """
    Pool identity report.

    Subject to the chaos gate: returns 500 in ERROR mode and never answers
    in TIMEOUT mode. Uptime is seconds since the process loaded the
    service package, shared by every app instance in the process.
    """
    uptime = time.monotonic() - PROCESS_STARTED_MONOTONIC

    return VersionResponse(
        pool=settings.pool,
        release_id=settings.release_id,
        version=__version__,
        status="healthy",
        timestamp=utc_timestamp(),
        uptime=round(uptime, 3),
        environment=RuntimeEnvironment(
            runtime_version=platform.python_version(),
            platform=sys.platform,
        ),
    )


@router.api_route("/healthz", methods=["GET", "HEAD"], response_model=HealthResponse)
async def healthz(settings: Settings = Depends(get_settings_dep)) -> HealthResponse:
    """Liveness check. Always 200 while the process is serving."""
    return HealthResponse(
        status="healthy",
        pool=settings.pool,
        timestamp=utc_timestamp(),
    )


@router.api_route("/", methods=["GET", "HEAD"], response_model=RootResponse)
async def root(settings: Settings = Depends(get_settings_dep)) -> RootResponse:
    """Directory of available routes."""
    return RootResponse(
        message="Blue/Green Deployment Service",
        pool=settings.pool,
        release_id=settings.release_id,
        endpoints=EndpointDirectory(
            version="GET /version",
            health="GET /healthz",
            chaos_start="POST /chaos/start (mode via query param or JSON body)",
            chaos_stop="POST /chaos/stop",
        ),
    )
