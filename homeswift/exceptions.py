"""
Error taxonomy of the messaging service and the DRF handler that renders it.

Every error leaves the API as ``{"error": "<message>"}`` with the matching
HTTP status; schema errors add a ``details`` mapping.
"""

import logging

from django.db import DatabaseError, OperationalError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class MessagingError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MessagingError):
    """A required field is missing or a payload breaks a rule."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class Forbidden(MessagingError):
    """The acting user may not touch the target conversation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Access denied'


class NotFound(MessagingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class DependencyFailure(MessagingError):
    """The store or blob storage failed unexpectedly."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'A backing service failed'


class Unavailable(MessagingError):
    """The store or blob storage timed out or refused the connection."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = 'Service temporarily unavailable'


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Invalid request'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid request'
    return str(detail)


def _request_logger(context):
    request = context.get('request') if context else None
    return getattr(request, 'logger', None) or logger


def messaging_exception_handler(exc, context):
    """
    Render messaging errors, DRF errors and database failures as ``{"error": ...}``.
    """
    # rest_framework.views loads the permission classes, which import this module.
    from rest_framework.views import exception_handler

    log = _request_logger(context)

    if isinstance(exc, MessagingError):
        if exc.status_code >= 500:
            log.error("%s: %s", type(exc).__name__, exc.message)
        return Response({'error': exc.message}, status=exc.status_code)

    if isinstance(exc, DRFValidationError):
        return Response({
            'error': _first_message(exc.detail),
            'details': exc.detail,
        }, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, OperationalError):
        log.error("Store unavailable: %s", exc, exc_info=True)
        return Response({'error': Unavailable.default_message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    if isinstance(exc, DatabaseError):
        log.error("Store failure: %s", exc, exc_info=True)
        return Response({'error': DependencyFailure.default_message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get('detail') if isinstance(response.data, dict) else response.data
        response.data = {'error': _first_message(detail)}
        return response

    log.error("Unexpected error: %s", exc, exc_info=True)
    return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
