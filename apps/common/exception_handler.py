"""
DRF exception handler translating service failure kinds to responses.

Registered in settings as REST_FRAMEWORK['EXCEPTION_HANDLER'].
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import (
    ServiceError,
    NotFoundError,
    ConflictError,
    BusinessRuleError,
    PermissionDeniedError,
    SelfActionError,
)

logger = logging.getLogger(__name__)


STATUS_BY_KIND = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (BusinessRuleError, status.HTTP_400_BAD_REQUEST),
    (SelfActionError, status.HTTP_400_BAD_REQUEST),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
)


def status_for(exc: ServiceError) -> int:
    """Return the HTTP status for a service error."""
    for exc_class, status_code in STATUS_BY_KIND:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def service_exception_handler(exc, context):
    """Render ServiceError subclasses; defer everything else to DRF."""
    if isinstance(exc, ServiceError):
        status_code = status_for(exc)
        view = context.get('view')
        logger.info(
            "%s rejected in %s: %s",
            exc.kind,
            view.__class__.__name__ if view else 'unknown view',
            exc.message,
        )
        return Response(
            {'error': exc.kind, 'detail': exc.message},
            status=status_code,
        )

    return drf_exception_handler(exc, context)
