"""Structured error types and their HTTP mapping."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Something went wrong!"


def build_error_payload(code: str, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"message": message, "code": code}
    if errors is not None:
        payload["errors"] = errors
    return payload


def field_error(path: str, msg: str, value: Any = None) -> Dict[str, Any]:
    """One violated field rule, in the shape clients already parse."""
    return {"type": "field", "value": value, "msg": msg, "path": path, "location": "body"}


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "app_error"
    message: str = "Application error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.message
        self.errors = errors
        super().__init__(self.message)

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.code, self.message, self.errors)


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_failed"
    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, Any]], message: Optional[str] = None):
        super().__init__(message, errors)


class MissingToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "missing_token"
    message = "Access denied. No token provided."


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_token"
    message = "Token is not valid"


class ExpiredToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "expired_token"
    message = "Token has expired"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid credentials"


class InvalidIdentifier(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_identifier"
    message = "Invalid task ID"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Task not found"


class StoreUnavailable(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_unavailable"
    message = "Database unavailable"


def _server_error_response(request: Request, exc: Exception) -> JSONResponse:
    show_detail = request.app.state.settings.is_development
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": GENERIC_SERVER_ERROR,
            "error": str(exc) if show_detail else "Internal server error",
        },
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
        return _server_error_response(request, exc.__cause__ or exc)

    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.payload, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(field_error(".".join(loc), err.get("msg", "Invalid value"), err.get("input")))
    logger.info("%s %s -> 400 malformed request", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload(ValidationFailed.code, ValidationFailed.message, errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _server_error_response(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
