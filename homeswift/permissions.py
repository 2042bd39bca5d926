from rest_framework.permissions import BasePermission

from .exceptions import Forbidden


class IsAuthenticatedCaller(BasePermission):
    """Allow requests the JWT middleware resolved to a user."""

    message = 'Authentication required'

    def has_permission(self, request, view):
        return bool(getattr(request, 'is_authenticated', False) and getattr(request, 'user_id', None))


def resolve_acting_user(request, claimed_user_id=None):
    """
    Return the id the request acts as.

    A caller may name itself explicitly (``user_id``, ``userA``, ``sender_id``);
    naming anyone else is refused.
    """
    user_id = getattr(request, 'user_id', None)
    if claimed_user_id and user_id and str(claimed_user_id) != str(user_id):
        raise Forbidden('You can only act as the authenticated user')
    return str(claimed_user_id or user_id or '') or None
