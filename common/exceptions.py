"""
Error kinds raised by the record handlers and the DRF exception handler that
renders them as ``{"code": ..., "detail": ...}``.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ReferenceNotFound(exceptions.APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Referenced record not found."
    default_code = "reference_not_found"


class DuplicateValue(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A record with this value already exists."
    default_code = "duplicate_value"


class BusinessRuleViolation(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The operation is not allowed for this record."
    default_code = "business_rule"


class StoreFailure(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The database rejected the operation."
    default_code = "store_failure"


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.error(f"Store failure in {context['view'].__class__.__name__}: {exc}")
        exc = StoreFailure(str(exc))
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound(*exc.args)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(*exc.args)

    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = response.data
    if isinstance(detail, dict) and set(detail) == {"detail"}:
        detail = detail["detail"]
    response.data = {"code": exc.default_code, "detail": detail}
    return response
