"""Profiles API permissions.

Account endpoints reuse the shared owner-or-staff rule; the list of all
accounts is staff only.
"""

from common.permissions import IsAdminStaff, IsOwnerOrAdmin  # noqa: F401
