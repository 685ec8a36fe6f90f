"""
DRF exception handler producing structured error bodies.

Every failure response carries ``error`` (human-readable) and ``kind``
(machine-checkable). Unexpected exceptions are logged with full traceback
and returned as an opaque internal error; the exception text is only
included when DEBUG is on.
"""

import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import DomainError, InternalError

logger = logging.getLogger(__name__)


def _kind_for_api_exception(exc):
    if isinstance(exc, ValidationError):
        return 'validation'
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return 'unauthenticated'
    if isinstance(exc, (PermissionDenied, DjangoPermissionDenied)):
        return 'unauthorized'
    if isinstance(exc, (NotFound, Http404)):
        return 'not_found'
    return 'error'


def domain_exception_handler(exc, context):
    """Convert domain errors, DRF errors and crashes into JSON responses."""
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if isinstance(exc, InternalError):
        logger.error("Internal failure in %s: %s", view_name, exc.message, exc_info=exc)
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DomainError):
        logger.warning(
            "Rejected %s in %s: %s (%s)", exc.kind, view_name, exc.message, exc.code
        )
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        kind = _kind_for_api_exception(exc)
        if isinstance(response.data, dict) and 'detail' in response.data:
            response.data = {
                'error': str(response.data['detail']),
                'kind': kind,
            }
        else:
            response.data = {
                'error': 'Invalid input',
                'kind': kind,
                'fields': response.data,
            }
        return response

    logger.exception("Unhandled error in %s", view_name, exc_info=exc)
    payload = {'error': 'Internal server error', 'kind': 'internal'}
    if settings.DEBUG:
        payload['detail'] = str(exc)
    return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
