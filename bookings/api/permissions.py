"""Bookings API permissions.

Guests manage their own bookings; staff manage every booking.
"""

from common.permissions import IsOwnerOrAdmin

__all__ = ["IsOwnerOrAdmin"]
