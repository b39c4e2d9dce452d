"""
Service-layer exceptions and the DRF exception handler that renders them.

Services raise these; views never catch them. Every error that leaves the API
(service errors and DRF's own) is shaped as::

    {"statusCode": 404, "message": "Table not found", "error": "Not Found"}
"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for business-rule failures raised by services."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"

    def __init__(self, message=None):
        self.message = message or self.error
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Referenced entity is absent or fails a restaurant/table scoping check."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class BadRequestError(ServiceError):
    """Invalid input or a business rule rejected the operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class UpstreamError(ServiceError):
    """An external integration failed to answer."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error = "Bad Gateway"


def _flatten_detail(detail):
    """Turn DRF's nested error detail into a string or a flat list of strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            for item in _as_list(_flatten_detail(value)):
                messages.append(item if field == "non_field_errors" else f"{field}: {item}")
        return messages
    if isinstance(detail, list):
        messages = []
        for value in detail:
            messages.extend(_as_list(_flatten_detail(value)))
        return messages
    return str(detail)


def _as_list(value):
    return value if isinstance(value, list) else [value]


def _error_body(status_code, message, error):
    return {"statusCode": status_code, "message": message, "error": error}


def api_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER hook.

    ServiceError subclasses map straight to their status code. Everything DRF
    already knows how to render is reshaped into the same body.
    """
    if isinstance(exc, ServiceError):
        message = getattr(exc, "errors", None) or exc.message
        return Response(
            _error_body(exc.status_code, message, exc.error),
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is None:
        # Unhandled: let Django produce its 500 and log the traceback there.
        return None

    if isinstance(exc, (Http404, exceptions.NotFound)):
        error = "Not Found"
    elif isinstance(exc, (PermissionDenied, exceptions.PermissionDenied)):
        error = "Forbidden"
    elif isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        error = "Unauthorized"
    elif isinstance(exc, exceptions.Throttled):
        error = "Too Many Requests"
    elif isinstance(exc, exceptions.ValidationError):
        error = "Bad Request"
    else:
        error = response.status_text

    detail = getattr(exc, "detail", None)
    if isinstance(detail, dict) and "detail" in detail:
        # simplejwt token errors carry their own nested detail/messages
        detail = detail["detail"]
    message = _flatten_detail(detail) if detail is not None else str(exc)
    if isinstance(exc, exceptions.Throttled):
        message = "Too many requests, please try again later."

    response.data = _error_body(response.status_code, message, error)
    return response
