"""Contacts app models.

A Contact is a message sent through the public contact form.
"""

from django.db import models

from common.models import SoftDeleteModel


class Contact(SoftDeleteModel):
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=120)
    subject = models.CharField(max_length=150)
    message = models.TextField(max_length=5000)

    class Meta:
        db_table = "contacts"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>: {self.subject}"
