import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class CouponError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidInput(CouponError):
    status_code = status.HTTP_400_BAD_REQUEST


class CouponNotFound(CouponError):
    status_code = status.HTTP_404_NOT_FOUND


class CouponConflict(CouponError):
    status_code = status.HTTP_409_CONFLICT


class StorageError(CouponError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def flatten_detail(detail):
    """Turn DRF error detail (str, list or dict) into one message string."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return "; ".join(flatten_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    view = context.get("view")
    request = context.get("request")
    where = f"{request.method} {request.path}" if request is not None else repr(view)

    if isinstance(exc, CouponError):
        logger.warning("Error: %s (%s)", exc.message, where)
        return Response({"error": exc.message}, status=exc.status_code)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    if isinstance(exc, exceptions.MethodNotAllowed):
        message = f"method {request.method} not allowed" if request is not None else str(exc.detail)
        logger.warning("Error: %s", message)
        return Response({"error": message}, status=exc.status_code)

    if isinstance(exc, exceptions.APIException):
        message = flatten_detail(exc.detail)
        logger.warning("Error: %s (%s)", message, where)
        return Response({"error": message}, status=exc.status_code)

    logger.exception("Error: %s (%s)", exc, where)
    return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
