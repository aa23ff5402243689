"""Order status lifecycle.

Placed orders move through an explicit transition table. Updating an order
compares its state before and after the change and yields at most one
notification per milestone:

- ORDER_ACCEPTED: `accepted_at` newly set, or status enters PREPARING
- ORDER_READY: status enters READY
- ORDER_OUT_FOR_DELIVERY: status enters DELIVERING
- ORDER_DELIVERED: `delivered_at` newly set, or status enters RECEIVED

Milestone timestamps are write-once. Entering PREPARING back-fills
`accepted_at`, entering RECEIVED back-fills `delivered_at` and `received_at`.
"""

import logging

from django.conf import settings
from django.utils import timezone

from common.exceptions import Conflict, InvalidTransition
from notifications.models import Notification
from .models import Order

logger = logging.getLogger(__name__)

S = Order.Status

DEFAULT_TRANSITIONS = {
    S.CREATED: {S.PREPARING, S.READY, S.DELIVERING, S.RECEIVED, S.CANCELED},
    S.PREPARING: {S.READY, S.DELIVERING, S.RECEIVED, S.CANCELED},
    S.READY: {S.DELIVERING, S.RECEIVED, S.CANCELED},
    S.DELIVERING: {S.RECEIVED, S.CANCELED},
    S.RECEIVED: set(),
    S.CANCELED: set(),
}

MILESTONE_FIELDS = ("accepted_at", "delivered_at", "received_at")

BACKFILL = {
    str(S.PREPARING): ("accepted_at",),
    str(S.RECEIVED): ("delivered_at", "received_at"),
}

MESSAGES = {
    Notification.Type.ORDER_ACCEPTED: "Your order {id} has been accepted and is being prepared.",
    Notification.Type.ORDER_READY: "Your order {id} is ready.",
    Notification.Type.ORDER_OUT_FOR_DELIVERY: "Your order {id} is out for delivery.",
    Notification.Type.ORDER_DELIVERED: "Your order {id} has been delivered.",
}


def transition_table():
    """Return the active table; `settings.ORDER_STATUS_TRANSITIONS` overrides the default."""
    table = getattr(settings, "ORDER_STATUS_TRANSITIONS", None)
    if table is None:
        table = DEFAULT_TRANSITIONS
    return {str(state): {str(s) for s in targets} for state, targets in table.items()}


def check_transition(current, requested):
    """Raise InvalidTransition unless `current -> requested` is allowed.

    Re-submitting the current status is always allowed.
    """
    current, requested = str(current), str(requested)
    if requested == current:
        return
    reserved = {str(S.DRAFT), str(S.FAVOURITES)}
    if current in reserved or requested in reserved:
        raise InvalidTransition("Carts and favourites cannot be moved through the order lifecycle.")
    if requested not in transition_table().get(current, set()):
        logger.warning("Rejected order transition %s -> %s", current, requested)
        raise InvalidTransition(f"Cannot change order status from {current} to {requested}.")


def milestone_events(before: dict, order: Order) -> list:
    """Notification types implied by the difference between `before` and `order`."""

    def entered(status):
        return order.status == status and before["status"] != status

    def newly_set(field):
        return before[field] is None and getattr(order, field) is not None

    events = []
    if newly_set("accepted_at") or entered(S.PREPARING):
        events.append(Notification.Type.ORDER_ACCEPTED)
    if entered(S.READY):
        events.append(Notification.Type.ORDER_READY)
    if entered(S.DELIVERING):
        events.append(Notification.Type.ORDER_OUT_FOR_DELIVERY)
    if newly_set("delivered_at") or entered(S.RECEIVED):
        events.append(Notification.Type.ORDER_DELIVERED)
    return events


def apply_changes(order: Order, changes: dict, now=None) -> list:
    """Apply `status`, milestone timestamps and `total_price` to a placed order.

    Mutates `order` without saving it and returns the notification types to
    emit. Raises Conflict for carts/favourites and InvalidTransition for a
    move the table does not allow.
    """
    if order.role != Order.Role.ORDER:
        raise Conflict("Only placed orders can be updated.")

    now = now or timezone.now()
    before = {"status": order.status}
    before.update({f: getattr(order, f) for f in MILESTONE_FIELDS})

    requested = changes.get("status", order.status)
    check_transition(order.status, requested)
    order.status = requested

    for field in MILESTONE_FIELDS:
        if changes.get(field) is not None and getattr(order, field) is None:
            setattr(order, field, changes[field])

    if "total_price" in changes:
        order.total_price = changes["total_price"]

    events = milestone_events(before, order)

    if order.status != before["status"]:
        for field in BACKFILL.get(str(order.status), ()):
            if getattr(order, field) is None:
                setattr(order, field, now)
    return events


def message_for(notification_type, order: Order) -> str:
    return MESSAGES[notification_type].format(id=order.id)
