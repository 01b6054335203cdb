"""Centralized exception handlers for the channelpulse API.

Converts routing errors and domain exceptions into the
``{"error": {"code": ..., "message": ...}}`` envelope. Internal details
and stack traces are logged, never returned.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler as default_http_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from channelpulse.api.schemas.responses import ErrorCode, ErrorResponse
from channelpulse.exceptions import AggregationFatal

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES: dict[int, ErrorCode] = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


def error_response(
    code: ErrorCode,
    status: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error response for ``code``.

    Parameters
    ----------
    code : ErrorCode
        The error code to report.
    status : int
        HTTP status code for the response.
    headers : dict[str, str] | None, optional
        Extra response headers (default: None).

    Returns
    -------
    JSONResponse
        Response carrying the standard error envelope.
    """
    return JSONResponse(
        status_code=status,
        content=ErrorResponse.for_code(code).model_dump(exclude_none=True),
        headers=headers,
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Map routing errors (404, 405) onto the error envelope.

    Other HTTP exceptions fall through to FastAPI's default handler.
    """
    code = _HTTP_STATUS_CODES.get(exc.status_code)
    if code is None:
        return await default_http_handler(request, exc)
    return error_response(code, exc.status_code, headers=exc.headers)


async def aggregation_fatal_handler(
    request: Request, exc: AggregationFatal
) -> JSONResponse:
    """Report that no channel data, fresh or cached, is available."""
    logger.error(
        "channel_fetch_failed on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return error_response(ErrorCode.CHANNEL_FETCH_FAILED, 502)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions; logs the stack trace."""
    logger.exception("Unhandled exception: %s", exc)
    return error_response(ErrorCode.INTERNAL_ERROR, 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Parameters
    ----------
    app : FastAPI
        The FastAPI application instance.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AggregationFatal, aggregation_fatal_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)
