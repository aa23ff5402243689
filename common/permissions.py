"""Shared permissions.

Ownership is decided from the `user_id` URL kwarg for nested user routes and
from the object's `user_id` for detail routes. Staff users pass every check.
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


def is_staff(user) -> bool:
    return bool(user and user.is_authenticated and user.is_staff)


class IsAdminStaff(BasePermission):
    """Allow access only to authenticated staff (admin) users."""

    message = "Only admin staff users may perform this action."

    def has_permission(self, request, view):
        return is_staff(request.user)


class IsAdminOrReadOnly(BasePermission):
    """Public reads, staff-only writes."""

    message = "Only admin staff users may modify this resource."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_staff(request.user)


class IsOwnerOrAdmin(BasePermission):
    """Allow the owner addressed by the route (or object) and staff users."""

    message = "You may only access your own resources."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True
        user_id = view.kwargs.get("user_id")
        if user_id is None:
            return True
        return int(user_id) == user.id

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_staff:
            return True
        return getattr(obj, "user_id", None) == user.id
