"""Booking lifecycle.

Status changes follow an explicit table (overridable through
`settings.BOOKING_STATUS_TRANSITIONS`). Creating a booking tells the staff
(NEW_RESERVATION); a booking entering CONFIRMED tells its guest
(RESERVATION_CONFIRMED).
"""

import logging

from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import NotFound

from common.exceptions import InvalidTransition
from notifications.models import Notification
from notifications.services import broadcast, notify
from .models import Booking

logger = logging.getLogger(__name__)

S = Booking.Status

DEFAULT_TRANSITIONS = {
    S.PENDING: {S.CONFIRMED, S.CANCELLED_BY_CUSTOMER, S.CANCELLED_BY_RESTAURANT},
    S.CONFIRMED: {S.SEATED, S.NO_SHOW, S.CANCELLED_BY_CUSTOMER, S.CANCELLED_BY_RESTAURANT},
    S.SEATED: {S.COMPLETED},
    S.CANCELLED_BY_CUSTOMER: set(),
    S.CANCELLED_BY_RESTAURANT: set(),
    S.NO_SHOW: set(),
    S.COMPLETED: set(),
}


def transition_table():
    table = getattr(settings, "BOOKING_STATUS_TRANSITIONS", None)
    if table is None:
        table = DEFAULT_TRANSITIONS
    return {str(state): {str(s) for s in targets} for state, targets in table.items()}


def check_transition(current, requested):
    current, requested = str(current), str(requested)
    if requested == current:
        return
    if requested not in transition_table().get(current, set()):
        logger.warning("Rejected booking transition %s -> %s", current, requested)
        raise InvalidTransition(f"Cannot change booking status from {current} to {requested}.")


def create_booking(user_id, booked_at, number_of_people=1) -> Booking:
    booking = Booking.objects.create(
        user_id=user_id,
        booked_at=booked_at,
        number_of_people=number_of_people,
    )
    logger.info("Booking %s created for user %s", booking.id, user_id)
    broadcast(
        Notification.Type.NEW_RESERVATION,
        f"New reservation {booking.id} for {number_of_people} on {booked_at:%Y-%m-%d %H:%M}.",
    )
    return booking


def update_booking(booking_id, changes: dict) -> Booking:
    """Apply date, party size and status changes.

    The guest is notified once, when the booking moves into CONFIRMED.
    """
    with transaction.atomic():
        booking = Booking.objects.select_for_update().filter(pk=booking_id).first()
        if booking is None:
            raise NotFound("Booking not found.")
        before = str(booking.status)

        if "status" in changes:
            check_transition(booking.status, changes["status"])
            booking.status = changes["status"]
        for field in ("booked_at", "number_of_people"):
            if field in changes:
                setattr(booking, field, changes[field])
        booking.save()

    if str(booking.status) == S.CONFIRMED and before != S.CONFIRMED:
        notify(
            booking.user_id,
            Notification.Type.RESERVATION_CONFIRMED,
            f"Your reservation for {booking.number_of_people} on {booking.booked_at:%Y-%m-%d %H:%M} is confirmed.",
        )
    return booking
