"""
Notes Backend — Error Translation
==================================

What:  Terminal stage of the request pipeline: maps exceptions to responses.
How:   FastAPI exception handlers. They apply equally to exceptions raised in
       dependencies, in handlers, and after any `await` inside them.

Mapping:
    ValidationError, RequestValidationError  → 400 {"error": [messages]}
    AuthenticationError                      → 401 {"error": message}
    AuthorizationError                       → 403
    NotFoundError, unknown route             → 404
    DatabaseError, other NoteAppError        → 500 (generic message)
    Exception                                → 500 (generic message)

Internal details (SQL, stack traces) are logged, never returned.
"""

import logging
from typing import List, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteapp.exceptions import NoteAppError, ValidationError
from noteapp.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def error_response(
    status_code: int,
    error: Union[str, List[str]],
    headers: dict = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "request_id": request_id_var.get("")},
        headers=headers,
    )


def format_validation_errors(exc: RequestValidationError) -> List[str]:
    """
    One message per failing field, e.g. "username: Validation isEmail on
    username failed". The leading body/query/path location is dropped.
    """
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        field = ".".join(loc)
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return messages


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        messages = format_validation_errors(exc)
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), "; ".join(messages))
        return error_response(400, messages)

    @app.exception_handler(NoteAppError)
    async def handle_app_error(request: Request, exc: NoteAppError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            # Context may hold SQL or driver details: log only
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)

        logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        headers = None
        if exc.status_code == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Routing failures: unknown path, method not allowed
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(500, INTERNAL_ERROR_MESSAGE)
