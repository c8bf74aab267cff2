"""
DRF permission classes for dashboard endpoints.
"""

from rest_framework.permissions import BasePermission

from core.domain.value_objects import Identity


class IsAuthenticatedIdentity(BasePermission):
    """Allow requests that carry a session identity."""

    message = "Authentication required."

    def has_permission(self, request, view):
        return isinstance(request.user, Identity)


class IsAdminIdentity(IsAuthenticatedIdentity):
    """Allow only the admin identity."""

    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        return super().has_permission(request, view) and request.user.is_admin
