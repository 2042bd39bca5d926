import logging

import jwt

from django.conf import settings
from django.http import JsonResponse

from .jwt_utils import user_type_from_claims, validate_jwt_token
from .log_context import REQUEST_ID_HEADER, get_request_logger, new_request_id

logger = logging.getLogger(__name__)


class RequestContextMiddleware:
    """Attach a request id and a request-scoped logger to every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request.request_id = request_id[:64]
        request.logger = get_request_logger(request.request_id)

        response = self.get_response(request)
        response[REQUEST_ID_HEADER] = request.request_id
        return response


class JWTAuthMiddleware:
    """
    Resolve the bearer token to the acting user.

    On success the request carries ``user_id``, ``user_type`` and
    ``is_authenticated``. A missing token is answered with 401, an invalid
    or expired one with 403, before any view runs.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        # URLs that don't require authentication
        self.exempt_urls = [
            '/ping/',
            '/admin/',
            '/static/',
            settings.MEDIA_URL,
        ]

    def __call__(self, request):
        request.user_id = None
        request.user_type = None
        request.is_authenticated = False

        if self._is_exempt_url(request.path):
            return self.get_response(request)

        auth_header = request.META.get('HTTP_AUTHORIZATION', '')
        if not auth_header.startswith('Bearer ') or not auth_header[7:].strip():
            return JsonResponse({'error': 'Access denied. No token provided.'}, status=401)

        token = auth_header[7:].strip()
        try:
            payload = validate_jwt_token(token)
        except jwt.InvalidTokenError as e:
            self._log(request).warning("Token verification failed: %s", e)
            return JsonResponse({'error': 'Invalid or expired token.'}, status=403)

        if not payload.get('sub'):
            return JsonResponse({'error': 'Invalid or expired token.'}, status=403)

        request.user_id = str(payload['sub'])
        request.user_type = user_type_from_claims(payload)
        request.is_authenticated = True

        return self.get_response(request)

    def _is_exempt_url(self, path):
        """Check if the URL path is exempt from authentication"""
        for exempt_url in self.exempt_urls:
            if exempt_url and path.startswith(exempt_url):
                return True
        return False

    def _log(self, request):
        return getattr(request, 'logger', None) or logger
