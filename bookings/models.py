"""Bookings app models.

A Booking reserves a table for a party of 1 to 100 people at `booked_at`.
New bookings start as PENDING; see `bookings.services` for the allowed
status changes.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import SoftDeleteModel

MAX_PARTY_SIZE = 100


class Booking(SoftDeleteModel):
    class Status(models.TextChoices):
        PENDING = "PENDING", "pending"
        CONFIRMED = "CONFIRMED", "confirmed"
        CANCELLED_BY_CUSTOMER = "CANCELLED_BY_CUSTOMER", "cancelled by customer"
        CANCELLED_BY_RESTAURANT = "CANCELLED_BY_RESTAURANT", "cancelled by restaurant"
        NO_SHOW = "NO_SHOW", "no show"
        SEATED = "SEATED", "seated"
        COMPLETED = "COMPLETED", "completed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    number_of_people = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_PARTY_SIZE)],
    )
    booked_at = models.DateTimeField()
    status = models.CharField(max_length=30, choices=Status.choices, default=Status.PENDING)

    class Meta:
        db_table = "bookings"
        ordering = ["-booked_at"]

    def __str__(self) -> str:
        return f"Booking<{self.id} {self.user_id} x{self.number_of_people} @ {self.booked_at:%Y-%m-%d %H:%M} {self.status}>"
