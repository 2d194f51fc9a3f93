"""
Exception handlers mapping errors to JSON bodies that name the pool.

No handler returns stack traces or internal detail to the caller.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from bluegreen_service.api.models import utc_timestamp
from bluegreen_service.errors import CallerDisconnectedError, ServiceError
from bluegreen_service.logging import get_logger

logger = get_logger(__name__)

# Status recorded for requests whose caller left mid-hang (never reaches the wire)
CLIENT_CLOSED_REQUEST = 499


def _pool(request: Request) -> str:
    return request.app.state.settings.pool


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body: dict[str, str] = {"error": exc.message, "pool": _pool(request)}
    if exc.include_timestamp:
        body["timestamp"] = utc_timestamp()

    if exc.status_code < 500:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)

    return JSONResponse(status_code=exc.status_code, content=body)


async def caller_disconnected_handler(request: Request, exc: CallerDisconnectedError) -> Response:
    logger.info("Caller left hung request %s %s", request.method, request.url.path)
    return Response(status_code=CLIENT_CLOSED_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A path served only for another method is still an unmatched route
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "path": request.url.path, "pool": _pool(request)},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "pool": _pool(request)},
        headers=exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for unexpected faults.

    Runs outside the user middleware stack, so identity headers are set here
    directly.
    """
    settings = request.app.state.settings
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "pool": settings.pool},
        headers=settings.identity_headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(CallerDisconnectedError, caller_disconnected_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
