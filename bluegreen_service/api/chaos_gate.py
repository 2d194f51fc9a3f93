"""
Chaos gate for the versioned identity route.

Evaluated once per request before the handler body:
- chaos disabled: pass through
- ERROR mode: short-circuit with a simulated 500
- TIMEOUT mode: hold the request open without responding

The hang has no timer of its own unless CHAOS_MAX_HANG_S is set. It ends
when the caller disconnects or the server cancels the request on shutdown.
"""

import asyncio

from fastapi import Depends, Request

from bluegreen_service.api.deps import get_chaos_state, get_settings_dep
from bluegreen_service.chaos import ChaosMode, ChaosState
from bluegreen_service.config import Settings
from bluegreen_service.errors import (
    CallerDisconnectedError,
    SimulatedChaosError,
    SimulatedTimeoutError,
)
from bluegreen_service.logging import get_logger

logger = get_logger(__name__)

# How often a hung request checks whether its caller is still there
HANG_POLL_INTERVAL_S = 0.5


async def hang_until_disconnect(
    request: Request,
    max_hang_s: float | None = None,
    poll_interval_s: float = HANG_POLL_INTERVAL_S,
) -> None:
    """
    Suspend without producing a response.

    Args:
        request: Incoming request, polled for client disconnect
        max_hang_s: Optional bound on the hang
        poll_interval_s: Disconnect polling interval

    Raises:
        CallerDisconnectedError: The caller went away first
        SimulatedTimeoutError: max_hang_s elapsed first
    """
    loop = asyncio.get_running_loop()
    deadline = None if max_hang_s is None else loop.time() + max_hang_s

    while True:
        if await request.is_disconnected():
            raise CallerDisconnectedError()

        wait = poll_interval_s
        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise SimulatedTimeoutError()
            wait = min(wait, remaining)

        await asyncio.sleep(wait)


async def chaos_gate(
    request: Request,
    chaos: ChaosState = Depends(get_chaos_state),
    settings: Settings = Depends(get_settings_dep),
) -> None:
    """Dependency that applies the current chaos mode to a route."""
    snapshot = chaos.snapshot()
    if not snapshot.enabled:
        return

    if snapshot.mode is ChaosMode.ERROR:
        logger.info("Chaos gate rejecting %s %s", request.method, request.url.path)
        raise SimulatedChaosError()

    logger.info("Chaos gate holding %s %s open", request.method, request.url.path)
    await hang_until_disconnect(request, settings.chaos_max_hang_s)
