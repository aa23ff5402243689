"""Notifications app models.

A Notification records one lifecycle event (order accepted, booking
confirmed, ...). Rows without a user are broadcasts addressed to the staff.
"""

from django.conf import settings
from django.db import models

from common.models import SoftDeleteModel


class Notification(SoftDeleteModel):
    class Type(models.TextChoices):
        RESERVATION_CONFIRMED = "RESERVATION_CONFIRMED", "reservation confirmed"
        ORDER_READY = "ORDER_READY", "order ready"
        NEW_RESERVATION = "NEW_RESERVATION", "new reservation"
        NEW_ORDER = "NEW_ORDER", "new order"
        ORDER_ACCEPTED = "ORDER_ACCEPTED", "order accepted"
        ORDER_OUT_FOR_DELIVERY = "ORDER_OUT_FOR_DELIVERY", "order out for delivery"
        ORDER_DELIVERED = "ORDER_DELIVERED", "order delivered"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        null=True,
        blank=True,
    )
    type = models.CharField(max_length=30, choices=Type.choices)
    message = models.TextField(max_length=1000)
    read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "read_at"], name="notifications_user_read_idx"),
            models.Index(fields=["type"], name="notifications_type_idx"),
        ]

    def __str__(self):
        return f"{self.type} -> {self.user_id or 'staff'}"
