from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

from apps.api.codes import ErrorCode

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    ErrorCode.ROUTING_ERROR: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_TYPES_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IDS_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED_ERROR: status.HTTP_403_FORBIDDEN,
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # codes produced when converting DRF's own exceptions
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "NOT_ACCEPTABLE": status.HTTP_406_NOT_ACCEPTABLE,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(code: str) -> int:
    return ERROR_STATUS_MAP.get(code, DEFAULT_ERROR_STATUS)


def describe_cause(cause: Any) -> Any:
    """Make an error cause safe to serialise for clients."""
    if isinstance(cause, ValidationError):
        return as_serializer_error(cause)
    if isinstance(cause, BaseException):
        # Driver and database messages stay in the logs.
        return {"type": cause.__class__.__name__}
    if isinstance(cause, Mapping):
        return {str(key): describe_cause(value) for key, value in cause.items()}
    if isinstance(cause, (list, tuple)):
        return [describe_cause(item) for item in cause]
    return cause


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    name: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Build the ``{"error": {...}}`` body every failed request answers with.

    The status comes from ``http_status`` when given, otherwise from the
    code. ``details`` carries the cause of the error.
    """
    code = str(code or "").strip().upper()
    message = str(message or "").strip()
    if not code or not message:
        raise ValueError("error_response requires a code and a message")

    status_code = int(http_status) if http_status is not None else status_for(code)
    if not 100 <= status_code <= 599:
        raise ValueError(f"Invalid HTTP status code: {status_code}")

    error: Dict[str, Any] = {"code": code, "message": message, "status": status_code}
    if name:
        error["name"] = name
    if details is not None:
        error["details"] = describe_cause(details)

    return Response(
        {"error": error},
        status=status_code,
        headers=dict(headers) if headers else None,
    )
