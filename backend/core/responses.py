# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Response envelope and error mapping.

Every endpoint answers with one of two shapes:

    {"success": true,  "data": ...}
    {"success": false, "error": "<message>"}

Routers declare ``response_model=Envelope[SomeModel]`` and return
``ok(data)``.  Failures are raised as ``HTTPException`` and converted by the
handlers registered in :func:`register_exception_handlers`.

Status mapping
--------------
400  validation (including malformed bodies / bad query parameters)
401  no session
403  role / ownership violation or deactivated account
404  record not found
409  duplicate email
503  database unreachable (see :func:`is_storage_unavailable`)
500  anything else
"""

from typing import Any, Generic, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import logger

T = TypeVar("T")

STORAGE_UNAVAILABLE = "Database connection error. Please try again later."

# Substrings drivers put in connection-failure messages
_CONNECTION_SIGNATURES = (
    "can't reach database",
    "could not connect",
    "can't connect",
    "connection refused",
    "connection timed out",
    "server closed the connection",
    "unable to open database file",
    "lost connection",
    "name or service not known",
)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ApiModel(BaseModel):
    """
    Base for every request / response model.  Field names are snake_case in
    Python and camelCase on the wire; both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class Pagination(ApiModel):
    total: int
    page: int
    limit: int
    total_pages: int


class Message(ApiModel):
    message: str


def ok(data: Any) -> dict:
    return {"success": True, "data": data}


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


def is_storage_unavailable(exc: BaseException) -> bool:
    """True when a database error means the server could not be reached."""
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    # OperationalError also covers lock timeouts on a live server, so the
    # message has to name a connection failure.
    if not isinstance(exc, OperationalError):
        return False
    text = str(getattr(exc, "orig", None) or exc).lower()
    return any(sig in text for sig in _CONNECTION_SIGNATURES)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    if first.get("type") == "missing":
        return "Missing required fields"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "request"
    return f"Invalid value for {field}: {first.get('msg', 'invalid')}"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(_validation_message(exc)),
    )


async def _database_exception_handler(request: Request, exc: SQLAlchemyError):
    if is_storage_unavailable(exc):
        logger.error("Database unreachable on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body(STORAGE_UNAVAILABLE),
        )
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


async def _unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    app.add_exception_handler(Exception, _unexpected_exception_handler)
