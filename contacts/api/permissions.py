"""Contacts API permissions.

Anyone may send a message through the contact form; reading and removing
messages is staff only.
"""

from rest_framework.permissions import BasePermission

from common.permissions import IsAdminStaff, is_staff

__all__ = ["IsAdminStaff", "AnyoneCanWriteStaffCanRead"]


class AnyoneCanWriteStaffCanRead(BasePermission):
    message = "Only admin staff users may read contact messages."

    def has_permission(self, request, view):
        if request.method == "POST":
            return True
        return is_staff(request.user)
