"""Notifications API permissions."""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from common.permissions import IsAdminStaff, is_staff

__all__ = ["IsAdminStaff", "IsNotificationRecipientOrAdmin", "StaffCreatesNotifications"]


class StaffCreatesNotifications(BasePermission):
    """Anyone signed in may read their inbox; only staff may post to it."""

    message = "Only admin staff users may create notifications."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_staff(request.user)


class IsNotificationRecipientOrAdmin(BasePermission):
    """Recipients manage their own notifications; broadcasts belong to staff."""

    message = "You may only manage your own notifications."

    def has_object_permission(self, request, view, obj):
        if is_staff(request.user):
            return True
        return obj.user_id is not None and obj.user_id == request.user.id
