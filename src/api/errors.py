"""App-wide exception handlers.

Route handlers map the errors they expect themselves; these catch what is
left: payload validation (400 instead of FastAPI's 422), missing sessions,
and store failures nobody handled.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.security import NotAuthenticatedError, not_authenticated_handler
from domain.model.errors import StoreError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def first_validation_message(exc: RequestValidationError) -> str:
    """'<field>: <message>' for the first violated field."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "body: Invalid JSON"

    loc = list(first.get("loc", ()))
    if loc and loc[0] in _LOCATION_PREFIXES:
        location = loc.pop(0)
        # A body error can carry the character offset where parsing stopped
        if location == "body" and loc and isinstance(loc[0], int):
            loc.pop(0)
    field = ".".join(str(p) for p in loc) or "body"
    message = str(first.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{field}: {message}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = first_validation_message(exc)
    logger.info("Request validation failed", extra={"path": request.url.path, "detail": detail})
    return JSONResponse({"detail": detail}, status_code=status.HTTP_400_BAD_REQUEST)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Unhandled store error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        {"detail": "Internal server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(NotAuthenticatedError, not_authenticated_handler)
    app.add_exception_handler(StoreError, store_error_handler)


def hide_unused_validation_responses(app: FastAPI) -> None:
    """Drop FastAPI's default 422 entries from the OpenAPI document.

    validation_error_handler answers every validation failure with 400, which
    the routes document themselves.
    """
    default_openapi = app.openapi

    def openapi() -> dict:
        schema = default_openapi()
        for path_item in schema.get("paths", {}).values():
            for operation in path_item.values():
                if isinstance(operation, dict):
                    operation.get("responses", {}).pop("422", None)
        schemas = schema.get("components", {}).get("schemas", {})
        schemas.pop("HTTPValidationError", None)
        schemas.pop("ValidationError", None)
        return schema

    app.openapi = openapi
