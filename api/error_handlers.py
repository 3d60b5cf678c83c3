"""Map store errors onto JSON error bodies.

Every error response has the shape {"error": {"code", "message", "details"?}}.
A NotFoundOrDeniedError always renders the same body for a given resource
kind, whether the row is missing or owned by someone else.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from copydesk.exceptions import AuthenticationError, CopydeskError, NotFoundOrDeniedError
from copydesk.logging import get_logger

logger = get_logger(__name__)

# Framework-raised statuses: unknown route, wrong method, /ready failing
HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    503: "SERVICE_UNAVAILABLE",
}


def error_body(code: str, message: str, details: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"error": error}


async def not_found_handler(request: Request, exc: NotFoundOrDeniedError) -> JSONResponse:
    """404 without details; nothing in it depends on who owns the row."""
    logger.info("resource_not_found", path=request.url.path, message=exc.message)
    return JSONResponse(status_code=404, content=error_body(exc.error_code, exc.message))


async def copydesk_error_handler(request: Request, exc: CopydeskError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        path=request.url.path,
        status=exc.status_code,
        code=exc.error_code,
        message=exc.message,
    )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, exc.details),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters become a 400 VALIDATION_ERROR."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", [])),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    logger.info("request_invalid", path=request.url.path, fields=len(errors))
    return JSONResponse(
        status_code=400,
        content=error_body("VALIDATION_ERROR", "Request validation failed", {"errors": errors}),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    message = str(exc.detail) if exc.detail else code.replace("_", " ").capitalize()
    logger.info("http_error", path=request.url.path, status=exc.status_code, code=code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, message),
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500; the traceback goes to the log only."""
    logger.exception("unexpected_error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "An unexpected error occurred"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundOrDeniedError, not_found_handler)
    app.add_exception_handler(CopydeskError, copydesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
