"""
Registry Permissions

Role-based permissions shared by every app.
"""
from rest_framework import permissions


def _has_role(request, *roles):
    return (
        request.user and
        request.user.is_authenticated and
        request.user.role in roles
    )


class IsRegistryAdmin(permissions.BasePermission):
    """
    Permission for administrators reviewing applicants.
    """
    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        return _has_role(request, 'ADMIN')


class IsFarmer(permissions.BasePermission):
    """Permission for regular farmer logins."""

    def has_permission(self, request, view):
        return _has_role(request, 'FARMER')


class IsOrganicFarmer(permissions.BasePermission):
    """Permission for organic farmer logins."""

    def has_permission(self, request, view):
        return _has_role(request, 'ORGANIC_FARMER')


class IsRegistrant(permissions.BasePermission):
    """
    Permission for either kind of farmer.
    """
    message = 'Only farmers can perform this action.'

    def has_permission(self, request, view):
        return _has_role(request, 'FARMER', 'ORGANIC_FARMER')


class IsAdminOrRegistrant(permissions.BasePermission):
    """Any of the three registry roles."""

    def has_permission(self, request, view):
        return _has_role(request, 'ADMIN', 'FARMER', 'ORGANIC_FARMER')
