"""
JWT utilities for the HomeSwift messaging service.

Access tokens are issued by the auth provider (Supabase) and signed with the
project's JWT secret. This module validates them and, for tests and local
tooling, mints tokens with the same shape.
"""

import time

import jwt
from django.conf import settings


class JWTManager:
    """
    JWT Manager for token generation and validation.
    """

    def __init__(self):
        # Don't access settings immediately
        self._secret = None
        self._algorithm = None
        self._audience = None

    def _get_secret(self):
        """Get the signing secret, with lazy loading."""
        if self._secret is None:
            self._secret = getattr(settings, 'JWT_SECRET', 'homeswift-dev-jwt-secret')
        return self._secret

    def _get_algorithm(self):
        """Get the JWT algorithm, with lazy loading."""
        if self._algorithm is None:
            self._algorithm = getattr(settings, 'JWT_ALGORITHM', 'HS256')
        return self._algorithm

    def _get_audience(self):
        """Get the expected audience, with lazy loading."""
        if self._audience is None:
            self._audience = getattr(settings, 'JWT_AUDIENCE', 'authenticated')
        return self._audience

    def generate_token(self, user_id, user_type='renter', expires_in_hours=24):
        """
        Generate a JWT token shaped like a provider access token.

        Args:
            user_id (str): The user ID to include in the token
            user_type (str): 'renter' or 'landlord', carried in user_metadata
            expires_in_hours (int): Token expiration time in hours

        Returns:
            str: JWT token string
        """
        now = int(time.time())
        payload = {
            'sub': user_id,
            'aud': self._get_audience(),
            'role': 'authenticated',
            'user_metadata': {'user_type': user_type},
            'iat': now,
            'exp': now + (expires_in_hours * 3600),
        }

        return jwt.encode(payload, self._get_secret(), algorithm=self._get_algorithm())

    def validate_token(self, token):
        """
        Validate a JWT token and extract the payload.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        try:
            return jwt.decode(
                token,
                self._get_secret(),
                algorithms=[self._get_algorithm()],
                audience=self._get_audience(),
            )
        except jwt.ExpiredSignatureError:
            raise jwt.InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")

    def extract_identity(self, token):
        """
        Extract ``(user_id, user_type)`` from a token, or ``(None, None)`` if invalid.
        """
        try:
            payload = self.validate_token(token)
        except jwt.InvalidTokenError:
            return None, None
        return payload.get('sub'), user_type_from_claims(payload)


def user_type_from_claims(payload):
    metadata = payload.get('user_metadata') or {}
    return metadata.get('user_type') or payload.get('user_type') or 'renter'


# Global JWT manager instance - create lazily
_jwt_manager = None


def _get_jwt_manager():
    """Get the global JWT manager instance, creating it if needed."""
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def generate_test_token(user_id, user_type='renter', expires_in_hours=24):
    """Generate a test JWT token for the given user ID."""
    return _get_jwt_manager().generate_token(user_id, user_type, expires_in_hours)


def validate_jwt_token(token):
    """Validate a JWT token and return the payload."""
    return _get_jwt_manager().validate_token(token)


def get_identity_from_token(token):
    """Extract ``(user_id, user_type)`` from a JWT token."""
    return _get_jwt_manager().extract_identity(token)
