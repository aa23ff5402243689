"""Orders API permissions.

Cart, favourites and per-user order routes are open to the addressed user and
to staff. Placed orders may be read by their owner; changing or deleting them
is staff only.
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from common.permissions import IsAdminStaff, IsOwnerOrAdmin, is_staff

__all__ = ["IsAdminStaff", "IsOwnerOrAdmin", "IsOrderOwnerReadOrAdmin"]


class IsOrderOwnerReadOrAdmin(BasePermission):
    """Owners may read their order; only staff may update or delete it."""

    message = "Only admin staff users may modify orders."

    def has_object_permission(self, request, view, obj):
        if is_staff(request.user):
            return True
        if request.method not in SAFE_METHODS:
            return False
        if obj.user_id != request.user.id:
            self.message = "You may only access your own orders."
            return False
        return True
