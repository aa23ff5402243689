"""Notification sink used by the order and booking lifecycles.

Writes are best effort: each one runs in its own savepoint, and a failure is
logged and dropped so it can never undo or fail the change that caused it.
"""

import logging

from django.db import transaction

from .models import Notification

logger = logging.getLogger(__name__)


def notify(user_id, notification_type, message):
    """Record one notification; `user_id=None` addresses the staff.

    Returns the created notification, or None if the write failed.
    """
    try:
        with transaction.atomic():
            return Notification.objects.create(user_id=user_id, type=notification_type, message=message)
    except Exception:
        logger.exception("Could not record %s notification for user %s", notification_type, user_id)
        return None


def broadcast(notification_type, message):
    return notify(None, notification_type, message)
