"""
Chaos control routes.

POST /chaos/start enables simulated failure on the gated routes,
POST /chaos/stop turns it off again. Neither route is itself gated.
"""

import json

from fastapi import APIRouter, Depends, Query, Request

from bluegreen_service.api.deps import get_chaos_state, get_settings_dep
from bluegreen_service.api.models import ChaosStartResponse, ChaosStopResponse, utc_timestamp
from bluegreen_service.chaos import ChaosMode, ChaosState
from bluegreen_service.config import Settings
from bluegreen_service.errors import (
    InvalidChaosModeError,
    MalformedBodyError,
    PayloadTooLargeError,
)

router = APIRouter(prefix="/chaos", tags=["Chaos"])

# Largest JSON body accepted on /chaos/start
MAX_BODY_BYTES = 100 * 1024


def _is_absent(value: object) -> bool:
    return value is None or value == ""


async def read_limited_body(request: Request, limit: int = MAX_BODY_BYTES) -> bytes:
    """
    Read the request body, refusing anything over limit bytes.

    Raises:
        PayloadTooLargeError: Declared or actual size exceeds the limit
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError()
    return bytes(body)


async def read_body_mode(request: Request) -> object:
    """
    Extract "mode" from a JSON object body.

    Bodies that are empty, not declared as JSON, or not a JSON object are
    treated as carrying no mode.

    Raises:
        MalformedBodyError: Body is declared as JSON but does not parse
        PayloadTooLargeError: JSON body is over MAX_BODY_BYTES
    """
    content_type = request.headers.get("content-type", "").lower()
    if "json" not in content_type:
        return None

    raw = await read_limited_body(request)
    if not raw.strip():
        return None

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise MalformedBodyError() from e

    if not isinstance(payload, dict):
        return None
    return payload.get("mode")


@router.post("/start", response_model=ChaosStartResponse)
async def start_chaos(
    request: Request,
    mode: str | None = Query(default=None, description="error or timeout; wins over the body"),
    chaos: ChaosState = Depends(get_chaos_state),
    settings: Settings = Depends(get_settings_dep),
) -> ChaosStartResponse:
    """
    Enable chaos mode.

    The mode comes from the query string, then the JSON body, then
    defaults to "error". An invalid mode leaves the state untouched, and
    so does a repeated mode query parameter.
    """
    query_modes = request.query_params.getlist("mode")
    if len(query_modes) > 1:
        raise InvalidChaosModeError(query_modes)

    requested: object = mode
    if _is_absent(requested):
        requested = await read_body_mode(request)
    if _is_absent(requested):
        requested = ChaosMode.ERROR.value

    snapshot = chaos.start(ChaosMode.parse(requested))

    return ChaosStartResponse(
        message="Chaos mode enabled",
        mode=snapshot.mode.value,
        pool=settings.pool,
        timestamp=utc_timestamp(),
    )


@router.post("/stop", response_model=ChaosStopResponse)
async def stop_chaos(
    chaos: ChaosState = Depends(get_chaos_state),
    settings: Settings = Depends(get_settings_dep),
) -> ChaosStopResponse:
    """Disable chaos mode. Safe to call when already disabled."""
    was_enabled = chaos.stop()

    return ChaosStopResponse(
        message="Chaos mode disabled",
        was_enabled=was_enabled,
        pool=settings.pool,
        timestamp=utc_timestamp(),
    )
