"""Profiles app models.

Defines the Profile model that extends the base user with contact data, an
avatar and the email verification flag. String fields intentionally default
to empty strings to avoid nulls in API responses.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Profile for a single user (customer or staff).

    A profile is created at most once per user (OneToOne relationship).
    Staff status lives on the user itself (`is_staff`).
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    phone_number = models.CharField(max_length=30, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    image = models.CharField(max_length=255, blank=True, default="")
    email_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.user.username}>"
