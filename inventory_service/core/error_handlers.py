"""
Exception handlers turning every failure into the same JSON envelope:

    {"path": "/api/v1/inventory/buy", "mensaje": ["..."]}

Client errors keep their message; server-side failures get a generic one so
internal details never reach the caller.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_service.core.exceptions import (
    DatabaseError,
    InvalidRequestError,
    NotFoundError,
    UpstreamServiceError,
)
from inventory_service.schemas.inventory import ErrorEnvelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
UPSTREAM_ERROR_MESSAGE = "Product service is temporarily unavailable, please retry later"
MALFORMED_BODY_MESSAGE = "Malformed JSON body"


def error_response(request: Request, status_code: int, messages: List[str]) -> JSONResponse:
    envelope = ErrorEnvelope(path=request.url.path, mensaje=messages)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


def _describe_validation_error(error: dict) -> str:
    if error.get("type") == "json_invalid":
        return MALFORMED_BODY_MESSAGE

    # Drop the "body"/"path" prefix pydantic puts on request errors
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(location)
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [_describe_validation_error(error) for error in exc.errors()]
    logger.warning(f"Invalid request to {request.url.path}: {messages}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, messages)


async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"Not found on {request.url.path}: {str(exc)}")
    return error_response(request, status.HTTP_404_NOT_FOUND, [str(exc)])


async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    logger.warning(f"Rejected request to {request.url.path}: {str(exc)}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, [str(exc)])


async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    logger.error(f"Upstream failure on {request.url.path}: {str(exc)}")
    return error_response(request, status.HTTP_503_SERVICE_UNAVAILABLE, [UPSTREAM_ERROR_MESSAGE])


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, [str(exc.detail)])


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {str(exc)}")
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, [INTERNAL_ERROR_MESSAGE])


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DatabaseError, internal_error_handler)
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
