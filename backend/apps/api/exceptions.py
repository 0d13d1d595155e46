from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAcceptable,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.codes import ErrorCode
from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

DATABASE_ERROR_NAME = "Database Error"
DATABASE_ERROR_MESSAGE = "An error occurred while communicating with the database."
SERVER_ERROR_MESSAGE = "Something went wrong"

# (exception types, code, fallback message, expose DRF payload as details)
DRF_TRANSLATIONS = (
    (ValidationError, ErrorCode.INVALID_TYPES_ERROR, "Validation failed", True),
    (ParseError, ErrorCode.INVALID_TYPES_ERROR, "Malformed request", False),
    (
        (NotAuthenticated, AuthenticationFailed),
        "UNAUTHORIZED",
        "Authentication required",
        False,
    ),
    (
        (PermissionDenied, DjangoPermissionDenied),
        "FORBIDDEN",
        "You do not have permission to perform this action",
        False,
    ),
    ((NotFound, Http404), ErrorCode.ROUTING_ERROR, "Resource not found", False),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED", "Method not allowed", False),
    (NotAcceptable, "NOT_ACCEPTABLE", "Could not satisfy the Accept header", False),
    (UnsupportedMediaType, "UNSUPPORTED_MEDIA_TYPE", "Unsupported media type", False),
)


class CustomError(Exception):
    """
    Application error raised by handlers and forwarded to the exception handler.

    Args:
        name: Short title of the failure, e.g. ``"Invalid ID Error"``.
        message: Human readable explanation.
        code: One of ``ErrorCode``; drives the HTTP status.
        cause: What triggered the error: a description of the bad input or
            the original exception.
    """

    def __init__(
        self,
        *,
        name: str,
        message: str,
        code: str,
        cause: Optional[Any] = None,
    ):
        super().__init__(message)
        self.name = name
        self.message = message
        self.code = code
        self.cause = cause

    def __repr__(self) -> str:
        return f"CustomError(code={self.code!r}, name={self.name!r}, message={self.message!r})"

    def to_response(self) -> Response:
        return error_response(self.code, self.message, self.cause, name=self.name)


def database_error(exc: BaseException, message: Optional[str] = None) -> CustomError:
    """Wrap an unexpected failure from a dependency, keeping it as the cause."""
    return CustomError(
        name=DATABASE_ERROR_NAME,
        message=message or DATABASE_ERROR_MESSAGE,
        cause=exc,
        code=ErrorCode.DATABASE_ERROR,
    )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER``: every error raised by a view ends up here.

    ``CustomError`` answers with its own code and cause. DRF exceptions are
    translated into the same envelope. Anything else is a 500 that does not
    leak the original message.
    """
    log = _bind_logger(context)

    if isinstance(exc, CustomError):
        response = exc.to_response()
        if response.status_code >= 500:
            log.error(
                "Request failed",
                code=exc.code,
                status=response.status_code,
                cause=exc.cause,
            )
        else:
            log.info("Request rejected", code=exc.code, status=response.status_code)
        return response

    drf_response = drf_exception_handler(exc, context)
    if drf_response is None:
        log.exception("Unhandled exception")
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, fallback, keep_details = _translation_for(exc)
    status_code = drf_response.status_code
    if status_code >= 500:
        code, message, details = "SERVER_ERROR", SERVER_ERROR_MESSAGE, None
    else:
        message = _first_message(drf_response.data) or fallback
        details = drf_response.data if keep_details else None
    log.info("Converted framework exception", code=code, status=status_code)
    return error_response(
        code,
        message,
        details,
        http_status=status_code,
        headers=drf_response.headers if getattr(drf_response, "headers", None) else None,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=view.__class__.__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _translation_for(exc: Exception) -> Tuple[str, str, bool]:
    for exc_types, code, fallback, keep_details in DRF_TRANSLATIONS:
        if isinstance(exc, exc_types):
            return code, fallback, keep_details
    return "REQUEST_ERROR", "Request failed", False


def _first_message(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return None
