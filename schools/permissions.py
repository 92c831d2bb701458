from rest_framework import permissions
from users.models import UserRole


class IsAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == UserRole.ADMIN


class IsAdminOrGuru(permissions.BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.role in [UserRole.ADMIN, UserRole.GURU]
        )


class IsAdminOrReadOnly(permissions.BasePermission):
    """Any staff member may read; only admins may write."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return IsAdminOrGuru().has_permission(request, view)
        return IsAdmin().has_permission(request, view)
