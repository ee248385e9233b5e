"""Error translation — the only code that writes an error response body.

Every failure reaching the HTTP boundary, typed or not, goes through
error_response() and comes out as one ErrorBody with a matching status:

    NotFoundError          → 404    UnauthenticatedError → 401
    InvalidNameError       → 400    ForbiddenError       → 403
    RequestValidationError → 400    ConflictError        → 409
    HTTPException          → its own status
    anything else          → 500

``?trace=true`` adds a stackTrace list; without it the key is absent.
"""

import traceback
from collections.abc import Mapping
from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from anime_api.config import settings
from anime_api.exceptions import DomainError, ErrorKind
from anime_api.logging import get_logger
from anime_api.middleware import REQUEST_ID_HEADER
from anime_api.schemas.error import ErrorBody

logger = get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
}

DEVELOPER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "A ResponseStatusException Happened",
    ErrorKind.BAD_REQUEST: "A ResponseStatusException Happened",
    ErrorKind.UNAUTHORIZED: "An AuthenticationException Happened",
    ErrorKind.FORBIDDEN: "An AccessDeniedException Happened",
    ErrorKind.CONFLICT: "A ResponseStatusException Happened",
}
VALIDATION_DEVELOPER_MESSAGE = "A RequestValidationError Happened"
HTTP_DEVELOPER_MESSAGE = "An HTTPException Happened"
UNEXPECTED_DEVELOPER_MESSAGE = "An Unexpected Exception Happened"


def trace_requested(request: Request) -> bool:
    return request.query_params.get("trace") == "true"


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


def _stack_trace(exc: BaseException) -> list[str]:
    return "".join(traceback.format_exception(exc)).splitlines()


def error_response(
    request: Request,
    exc: BaseException,
    *,
    status_code: int,
    message: str,
    developer_message: str,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Build the canonical error response for ``exc``.

    The correlation header is set here as well as in RequestIDMiddleware:
    500s are sent by Starlette's ServerErrorMiddleware, outside our middleware.
    """
    request_id = getattr(request.state, "request_id", None)
    body = ErrorBody(
        timestamp=datetime.now(UTC),
        path=request.url.path,
        status=status_code,
        error=_reason_phrase(status_code),
        message=message,
        developer_message=developer_message,
        request_id=request_id,
        stack_trace=_stack_trace(exc) if trace_requested(request) else None,
    )
    response_headers = dict(headers) if headers else {}
    if request_id:
        response_headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(
        status_code=status_code,
        content=body.to_content(),
        headers=response_headers or None,
    )


def _challenge_headers() -> dict[str, str]:
    return {"WWW-Authenticate": f'Basic realm="{settings.auth_realm}"'}


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts) or "Invalid request"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Typed failures: fixed message, fixed developerMessage per kind."""
    status_code = STATUS_BY_KIND[exc.kind]
    logger.warning(
        "domain_error",
        kind=exc.kind.value,
        error=exc.message,
        path=request.url.path,
        method=request.method,
    )
    return error_response(
        request,
        exc,
        status_code=status_code,
        message=exc.message,
        developer_message=DEVELOPER_MESSAGES[exc.kind],
        headers=_challenge_headers() if exc.kind is ErrorKind.UNAUTHORIZED else None,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised errors: unknown route (for authenticated callers), wrong method."""
    message = exc.detail if isinstance(exc.detail, str) else _reason_phrase(exc.status_code)
    headers = exc.headers
    if exc.status_code == 401 and not headers:
        headers = _challenge_headers()
    return error_response(
        request,
        exc,
        status_code=exc.status_code,
        message=message,
        developer_message=HTTP_DEVELOPER_MESSAGE,
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and parameters are client errors: 400, not 422."""
    logger.warning("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return error_response(
        request,
        exc,
        status_code=400,
        message=_validation_message(exc),
        developer_message=VALIDATION_DEVELOPER_MESSAGE,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full exception and answer 500 without leaking internals.

    Storage failures land here. Details reach the client only via ?trace=true.
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return error_response(
        request,
        exc,
        status_code=500,
        message="Internal Server Error",
        developer_message=UNEXPECTED_DEVELOPER_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
