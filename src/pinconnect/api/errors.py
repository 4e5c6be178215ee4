"""Translate domain errors into HTTP responses.

Learn: Services raise typed PinConnectError subclasses; they never know
about status codes. This handler maps ErrorKind → status and renders
{"error": {"code", "message"}}. Storage and internal failures get a
generic message; the details are already in the log.

Request shape errors (missing field, bad UUID in the path, wrong JSON
type) come from FastAPI as RequestValidationError. They are rendered in
the same envelope as a 400 INVALID_INPUT, naming the first bad field.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pinconnect.errors import ErrorKind, PinConnectError

logger = structlog.get_logger()

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE_FAILURE: 500,
    ErrorKind.INTERNAL: 500,
}

_OPAQUE = {ErrorKind.STORAGE_FAILURE, ErrorKind.INTERNAL}
_LOCATIONS = {"body", "path", "query", "header"}


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def handle_domain_error(request: Request, exc: PinConnectError) -> JSONResponse:
    status = STATUS_BY_KIND.get(exc.kind, 500)
    message = exc.message
    if exc.kind in _OPAQUE:
        logger.error(
            "http.domain_error",
            path=request.url.path,
            kind=exc.kind.name,
            error=exc.message,
        )
        message = "internal server error"

    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(
        status_code=status,
        content=error_body(exc.kind.value, message),
        headers=headers,
    )


def _describe(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    field = ".".join(loc)
    msg = error.get("msg", "invalid input")
    return f"{field}: {msg}" if field else msg


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = _describe(errors[0]) if errors else "invalid input"
    logger.info("http.invalid_request", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=400,
        content=error_body(ErrorKind.VALIDATION.value, message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PinConnectError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
