"""Error Handlers: turn qnd-utils errors into HTTP responses for FastAPI apps.

Invariants:
    - Every response body is a QndError envelope ({"error": {...}})
    - RestResponseError answers with the upstream status and upstream body
    - ResponseDecodeError answers 502 and names the upstream status
    - Request validation failures are answered as RequestDataError (400, field details)
    - Anything else answers 500 INTERNAL_ERROR and never leaks the exception message
    - Log records carry error_code and path; upstream errors add status_code,
      storage errors add operation (surfaced by JSONFormatter)

Design Decisions:
    - One envelope path: validation and unhandled errors are converted into
      QndError instances, so handlers differ only in what they log
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from qnd_utils.core.errors import (
    QndError,
    ErrorCategory,
    ErrorSeverity,
    RequestDataError,
    ResponseDecodeError,
    RestResponseError,
)

logger = logging.getLogger(__name__)

# upstream bodies are truncated in log messages
_LOGGED_BODY_CHARS = 200


def register_error_handlers(app: FastAPI) -> None:
    """Register the qnd-utils error handlers on a FastAPI app."""
    app.add_exception_handler(QndError, qnd_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def qnd_error_handler(request: Request, exc: QndError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(level, _log_message(exc), extra=_log_fields(request, exc))

    content = exc.to_response()
    if isinstance(exc, ResponseDecodeError):
        content["error"]["upstream_status"] = exc.status
    return JSONResponse(status_code=exc.http_status, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return await qnd_error_handler(request, RequestDataError(details))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    internal = QndError(
        "An unexpected error occurred", "INTERNAL_ERROR",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )
    return JSONResponse(status_code=internal.http_status, content=internal.to_response())


def _log_message(exc: QndError) -> str:
    if isinstance(exc, RestResponseError):
        body = repr(exc.body)[:_LOGGED_BODY_CHARS]
        return f"Upstream responded {exc.status}: {body}"
    if isinstance(exc, ResponseDecodeError):
        body = repr(exc.body)[:_LOGGED_BODY_CHARS]
        return f"Upstream {exc.status} body is not JSON: {body}"
    return f"{exc.code}: {exc.message}"


def _log_fields(request: Request, exc: QndError) -> dict:
    fields = {"error_code": exc.code, "path": request.url.path}
    if isinstance(exc, (RestResponseError, ResponseDecodeError)):
        fields["status_code"] = exc.status
    if exc.context.operation is not None:
        fields["operation"] = exc.context.operation
    return fields
