"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AuthenticationError,
    DomainException,
    KeyNotFoundError,
    ModeratorAlreadyExistsError,
    ModeratorNotFoundError,
    PermissionDeniedError,
    StorageError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


class APIError(APIException):
    """Base API exception with error code."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "An error occurred"
    default_code = "api_error"

    def __init__(self, detail=None, code=None, status_code=None):
        """
        Initialize API error.

        Args:
            detail: Error message
            code: Error code
            status_code: HTTP status code
        """
        if status_code:
            self.status_code = status_code
        if code:
            self.default_code = code
        super().__init__(detail)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, APIException):
        response = _handle_api_exception(exc, context)
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def domain_status_code(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code."""
    if isinstance(exc, StorageError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, (KeyNotFoundError, ModeratorNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ModeratorAlreadyExistsError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = domain_status_code(exc)
    if status_code >= 500:
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()
        logger.error("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    else:
        logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_api_exception(exc: APIException, context: Dict[str, Any]) -> Response:
    """Render DRF exceptions in the error envelope."""
    response = exception_handler(exc, context)
    if isinstance(response.data, dict) and "detail" in response.data:
        message = response.data["detail"]
    else:
        message = response.data
    code = exc.default_code.upper().replace("-", "_") if hasattr(exc, "default_code") else "API_ERROR"
    response.data = {"error": {"code": code, "message": message}}
    return response


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": INTERNAL_ERROR_MESSAGE}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
