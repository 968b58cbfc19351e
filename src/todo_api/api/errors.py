"""Exception handlers translating domain and storage failures to HTTP.

Response shapes:
    validation  400 {"_message": "<Model> validation failed", "message": ..., "errors": {...}}
    duplicate   400 {"code": 11000, "errmsg": ...}
    auth        401 empty body
    credentials 400 empty body
    unexpected  500 {"error": ..., "detail": ...}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from ..service.errors import AuthenticationError, InvalidCredentialsError

logger = logging.getLogger(__name__)


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "__all__"


def validation_error_body(title: str, errors: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Build the 400 body for a failed validation of ``title``."""
    fields: dict[str, str] = {}
    for error in errors:
        fields.setdefault(_field_name(error.get("loc", ())), error.get("msg", "Invalid value"))

    summary = f"{title} validation failed"
    details = ", ".join(f"{name}: {msg}" for name, msg in fields.items())
    return {
        "_message": summary,
        "message": f"{summary}: {details}" if details else summary,
        "errors": fields,
    }


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s validation failed", request.method, request.url.path, exc.title)
    return JSONResponse(status_code=400, content=validation_error_body(exc.title, exc.errors()))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: malformed request", request.method, request.url.path)
    return JSONResponse(status_code=400, content=validation_error_body("Request", exc.errors()))


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    logger.info("Rejected %s %s: duplicate key", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"code": exc.code, "errmsg": str(exc)})


async def authentication_handler(request: Request, exc: AuthenticationError) -> Response:
    logger.debug("Unauthenticated %s %s: %s", request.method, request.url.path, exc)
    return Response(status_code=401)


async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError) -> Response:
    return Response(status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "%s on %s (500): %s",
        type(exc).__name__,
        request.url.path,
        exc,
        exc_info=exc,
        extra={"http_method": request.method, "path": request.url.path, "status_code": 500},
    )
    return JSONResponse(status_code=500, content={"error": type(exc).__name__, "detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(AuthenticationError, authentication_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers", "validation_error_body"]
